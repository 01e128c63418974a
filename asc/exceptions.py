"""
Custom exception types for the AScript compiler and interpreter.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from asc.parser.core.classes import Span


class ErrorCode(Enum):

    # --- Lexical Errors ---
    INVALID_CHARACTER = "Syntax Error: Invalid character '{char}' found."
    UNTERMINATED_STRING = "Syntax Error: Unclosed string literal."
    LEXING_ERROR = "Syntax Error: A general lexing error occurred. Details: {details}"

    # --- Parse Errors ---
    # The parser found a token that is valid, but not in the right place.
    UNEXPECTED_TOKEN = "Syntax Error: Expected {expected}, but found {actual} instead."
    UNEXPECTED_STATEMENT = "Syntax Error: {actual} cannot start a statement."

    # --- Runtime Errors ---
    UNDEFINED_VARIABLE = "Variable '{name}' is not defined."
    NOT_A_FUNCTION = "'{name}' is not a function."
    OPERAND_TYPE_MISMATCH = "The '{op}' operator cannot be used with a '{left_type}' and a '{right_type}'."
    DIVISION_BY_ZERO = "The '{op}' operator cannot be used with a zero divisor."
    IMPORT_NOT_SUPPORTED = "import(\"{path}\") is only supported when compiling, not when running a script."

    # --- Source File Errors ---
    SOURCE_UNREADABLE = "Could not read source file '{path}': {reason}"

    # --- Import Errors ---
    IMPORT_FILE_NOT_FOUND = "Imported file not found: '{path}'"
    IMPORT_FAILED = "Error compiling import '{path}': {reason}"
    IMPORT_REQUIRES_BUILD = "import(\"{path}\") can only be resolved while building files from disk."

    # --- Configuration Errors ---
    CONFIG_NOT_FOUND = "Config file not found: '{path}'"
    CONFIG_INVALID_JSON = "Error parsing '{path}': {reason}"
    CONFIG_INVALID = "Invalid project configuration in '{path}': {reason}"


class AScriptError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        span: Optional["Span"] = None,
        file_path: Optional[str] = None,
        **kwargs,
    ):
        self.code = code
        self.span = span
        self.file_path = file_path
        self.details = kwargs

        # The format string (e.g., "Variable '{name}' is not defined.") is populated
        # with any extra data it needs from kwargs.
        self.core_message = code.value.format(**kwargs)

        location_prefix = ""
        if span and file_path:
            location_prefix = f"Error in '{file_path}' (Line: {span.s_line}, Column: {span.s_col}):\n"
        elif span:
            location_prefix = f"Error at Line: {span.s_line}, Column: {span.s_col}:\n"
        elif file_path:
            location_prefix = f"Error in '{file_path}': "

        self.message = location_prefix + self.core_message

        super().__init__(self.message)

    def with_file_path(self, file_path: str) -> "AScriptError":
        """Returns a copy of this error located in `file_path`."""
        return type(self)(self.code, span=self.span, file_path=file_path, **self.details)


class LexError(AScriptError):
    """An unrecognized character or malformed literal. Fatal to the current file."""


class ParseError(AScriptError):
    """A token mismatch. Carries `expected` and `actual` in `details`."""


class ScriptRuntimeError(AScriptError):
    """Raised while evaluating a program."""


class SourceReadError(AScriptError):
    """A source file that exists but cannot be read or is not valid UTF-8."""


class ScriptImportError(AScriptError):
    """A missing import target, or a wrapped failure from compiling it."""


class ConfigError(AScriptError):
    """Missing or unparsable project configuration. Fatal to the build."""


class InternalCompilerError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
