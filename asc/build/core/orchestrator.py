import os
import sys
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from asc.code_generation.code_emitter import CodeEmitter
from asc.config.config import OUTPUT_EXTENSION, SOURCE_EXTENSION
from asc.exceptions import AScriptError
from asc.utils import TerminalColors

from .module_loader import ModuleLoader


@dataclass
class BuildContext:
    """
    The shared, mutable state of one build invocation.

    `compiled` holds every absolute source path already compiled and written
    during this build; `in_progress` is the chain of paths currently being
    compiled and is only used to detect import cycles.
    """

    project_root: str
    out_dir: str
    compiled: Set[str] = field(default_factory=set)
    in_progress: List[str] = field(default_factory=list)
    source_extension: str = SOURCE_EXTENSION
    output_extension: str = OUTPUT_EXTENSION


@dataclass
class BuildReport:
    """The outcome of a whole-project build."""

    outputs: Dict[str, str] = field(default_factory=dict)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.failed


class BuildOrchestrator:
    """
    Drives lexing, parsing and emission per file and resolves imports by
    re-entering `compile` for each imported path.

    Imports are compiled depth-first: an imported file, including its own
    imports, is fully emitted and written before the statement that follows
    the import site. Each source path is written at most once per build.
    """

    def __init__(self, context: BuildContext, loader: Optional[ModuleLoader] = None, quiet: bool = False):
        self.context = context
        self.loader = loader or ModuleLoader()
        self.quiet = quiet

    def output_path_for(self, absolute_path: str) -> str:
        """Mirrors `absolute_path` from the project root into the output directory."""
        relative = os.path.relpath(absolute_path, self.context.project_root)
        base, ext = os.path.splitext(relative)
        if ext == self.context.source_extension:
            relative = base
        return os.path.join(self.context.out_dir, relative + self.context.output_extension)

    def compile(self, absolute_path: str) -> str:
        """Compiles one source file (and, transitively, its imports) and returns its emitted text."""
        absolute_path = os.path.abspath(absolute_path)
        context = self.context

        if absolute_path in context.compiled:
            return self._read_cached_output(absolute_path)

        if absolute_path in context.in_progress:
            relative = os.path.relpath(absolute_path, context.project_root)
            self._warn(f"Cyclic import detected (skipping inline): {absolute_path}")
            return f"/* cyclic import skipped: {relative} */"

        context.in_progress.append(absolute_path)
        try:
            program = self.loader.load(absolute_path)
            code = CodeEmitter(file_path=absolute_path, orchestrator=self).emit(program)

            output_path = self.output_path_for(absolute_path)
            os.makedirs(os.path.dirname(output_path), exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(code)

            context.compiled.add(absolute_path)
        finally:
            context.in_progress.pop()

        self._info(f"Compiled: {absolute_path} -> {output_path}")
        return code

    def build(self, entry_files: Iterable[str]) -> BuildReport:
        """
        Compiles every entry file in turn. A failing entry is reported and
        recorded, and the remaining entries are still attempted.
        """
        report = BuildReport()
        for entry in entry_files:
            absolute_path = os.path.abspath(entry)
            try:
                self.compile(absolute_path)
                report.outputs[absolute_path] = self.output_path_for(absolute_path)
            except FileNotFoundError as e:
                report.failed[absolute_path] = str(e)
                self._error(f"Error compiling {absolute_path}: {e}")
            except AScriptError as e:
                report.failed[absolute_path] = e.message
                self._error(f"Error compiling {absolute_path}: {e.message}")
        return report

    def _read_cached_output(self, absolute_path: str) -> str:
        output_path = self.output_path_for(absolute_path)
        try:
            with open(output_path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            self._warn(f"Compiled output for {absolute_path} is missing at {output_path}; inlining nothing.")
            return ""

    # --- Console reporting ---
    def _info(self, message: str):
        if not self.quiet:
            print(message)

    def _warn(self, message: str):
        print(f"{TerminalColors.YELLOW}WARNING: {message}{TerminalColors.RESET}", file=sys.stderr)

    def _error(self, message: str):
        print(f"{TerminalColors.RED}{message}{TerminalColors.RESET}", file=sys.stderr)
