from asc.exceptions import ErrorCode, SourceReadError
from asc.parser.core.classes import Program
from asc.parser.core.parser import parse_script


class ModuleLoader:
    """
    Responsible for loading and parsing AScript source files from disk.
    This class is the boundary between the compiler's pure logic and the file system.
    """

    def load(self, absolute_path: str) -> Program:
        """Reads and parses the file at `absolute_path`."""
        return parse_script(self.read(absolute_path), file_path=absolute_path)

    def read(self, absolute_path: str) -> str:
        """
        Returns the text of a source file. A missing file stays a FileNotFoundError;
        any other read or decoding failure becomes a SourceReadError.
        """
        try:
            with open(absolute_path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            raise FileNotFoundError(f"Compiler could not find file at: {absolute_path}")
        except UnicodeDecodeError as e:
            raise SourceReadError(ErrorCode.SOURCE_UNREADABLE, path=absolute_path, reason=f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
        except OSError as e:
            raise SourceReadError(ErrorCode.SOURCE_UNREADABLE, path=absolute_path, reason=e.strerror or str(e)) from e
