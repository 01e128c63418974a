from .core.lexer import Token, TokenKind, tokenize
from .core.parser import parse_script
