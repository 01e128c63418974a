from lark.exceptions import LarkError, UnexpectedCharacters

from asc.config.config import FRIENDLY_TOKEN_NAMES
from asc.exceptions import ErrorCode, LexError
from asc.parser.core.classes import Span


def friendly_token_name(kind) -> str:
    """Maps a token kind (or its name) to a human-readable description."""
    name = getattr(kind, "value", kind)
    return FRIENDLY_TOKEN_NAMES.get(name, f"'{name}'")


def _translate_lark_error(err: LarkError) -> LexError:
    """Translates a generic LarkError into a user-friendly LexError."""

    if isinstance(err, UnexpectedCharacters):
        span = Span(s_line=err.line, s_col=err.column, e_line=err.line, e_col=err.column + 1)
        # Strings are the only multi-character token that can start and fail to finish.
        if err.char == '"':
            return LexError(ErrorCode.UNTERMINATED_STRING, span=span)
        return LexError(ErrorCode.INVALID_CHARACTER, span=span, char=err.char)

    # Fallback for any other Lark error
    return LexError(ErrorCode.LEXING_ERROR, details=str(err))
