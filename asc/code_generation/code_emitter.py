import json
import os
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from asc.exceptions import AScriptError, ErrorCode, InternalCompilerError, ScriptImportError
from asc.parser.core.classes import *

if TYPE_CHECKING:
    from asc.build.core.orchestrator import BuildOrchestrator


class CodeEmitter:
    """
    Stringifies a Program AST into equivalent JavaScript source.

    The mapping is one-to-one except for two places: every binary and logical
    expression is wrapped in parentheses so the target's own precedence rules
    never matter, and an `import("path")` statement is replaced by the complete
    emitted text of the imported file, obtained from the BuildOrchestrator.
    """

    def __init__(self, file_path: Optional[str] = None, orchestrator: Optional["BuildOrchestrator"] = None):
        self.file_path = file_path
        self.base_dir = os.path.dirname(file_path) if file_path else os.getcwd()
        self.orchestrator = orchestrator
        self._emitters: Dict[type, Callable[[Any], str]] = {
            Program: self._emit_program,
            BlockStatement: self._emit_block,
            VariableDeclaration: self._emit_variable_declaration,
            AssignmentExpression: self._emit_assignment,
            BinaryExpression: self._emit_infix,
            LogicalExpression: self._emit_infix,
            Literal: self._emit_literal,
            Identifier: self._emit_identifier,
            IfStatement: self._emit_if,
            WhileStatement: self._emit_while,
            FunctionDeclaration: self._emit_function_declaration,
            CallExpression: self._emit_call,
            ReturnStatement: self._emit_return,
            PrintStatement: self._emit_print,
            ImportStatement: self._emit_import,
        }

    def emit(self, node: Node) -> str:
        emitter = self._emitters.get(type(node))
        if emitter is None:
            raise InternalCompilerError(f"The code emitter has no rule for node type '{type(node).__name__}'.")
        return emitter(node)

    def _emit_statement(self, node: Statement) -> str:
        # A call used as a statement needs its own terminator.
        code = self.emit(node)
        return f"{code};" if isinstance(node, CallExpression) else code

    def _emit_program(self, node: Program) -> str:
        return "\n".join(self._emit_statement(statement) for statement in node.body)

    def _emit_block(self, node: BlockStatement) -> str:
        inner = "\n".join(self._emit_statement(statement) for statement in node.body)
        return f"{{\n{inner}\n}}"

    def _emit_variable_declaration(self, node: VariableDeclaration) -> str:
        return f"let {node.name} = {self.emit(node.value)};"

    def _emit_assignment(self, node: AssignmentExpression) -> str:
        return f"{node.name} = {self.emit(node.value)};"

    def _emit_infix(self, node) -> str:
        return f"({self.emit(node.left)} {node.operator} {self.emit(node.right)})"

    def _emit_literal(self, node: Literal) -> str:
        return json.dumps(node.value, ensure_ascii=False)

    def _emit_identifier(self, node: Identifier) -> str:
        return node.name

    def _emit_if(self, node: IfStatement) -> str:
        code = f"if ({self.emit(node.test)}) {self._emit_statement(node.consequent)}"
        if node.alternate is not None:
            code += f" else {self._emit_statement(node.alternate)}"
        return code

    def _emit_while(self, node: WhileStatement) -> str:
        return f"while ({self.emit(node.test)}) {self._emit_statement(node.body)}"

    def _emit_function_declaration(self, node: FunctionDeclaration) -> str:
        body = self._emit_statement(node.body)
        # A JavaScript function body must be a block.
        if not isinstance(node.body, BlockStatement):
            body = f"{{\n{body}\n}}"
        return f"function {node.name}({', '.join(node.params)}) {body}"

    def _emit_call(self, node: CallExpression) -> str:
        return f"{node.callee}({', '.join(self.emit(argument) for argument in node.arguments)})"

    def _emit_return(self, node: ReturnStatement) -> str:
        return f"return {self.emit(node.argument)};"

    def _emit_print(self, node: PrintStatement) -> str:
        return f"console.log({self.emit(node.argument)});"

    def _emit_import(self, node: ImportStatement) -> str:
        """Inlines the imported file's emitted text at the import site."""
        if self.orchestrator is None:
            raise ScriptImportError(ErrorCode.IMPORT_REQUIRES_BUILD, span=node.span, file_path=self.file_path, path=node.path)

        import_path = os.path.abspath(os.path.join(self.base_dir, node.path))
        try:
            child_code = self.orchestrator.compile(import_path)
        except FileNotFoundError as e:
            raise ScriptImportError(ErrorCode.IMPORT_FILE_NOT_FOUND, span=node.span, file_path=self.file_path, path=node.path) from e
        except AScriptError as e:
            raise ScriptImportError(ErrorCode.IMPORT_FAILED, span=node.span, file_path=self.file_path, path=node.path, reason=e.message) from e

        return child_code or f"/* imported {os.path.basename(import_path)} */"
