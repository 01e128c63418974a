from .core.evaluator import Evaluator
from .core.scope import FunctionValue, Scope
