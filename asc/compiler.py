"""
High-level entry points: transpile a string, compile a single file, build a
whole project from its configuration, or run a script with the interpreter.
"""

import os
import sys
from typing import Any, Optional, TextIO

from asc.build.core.module_loader import ModuleLoader
from asc.build.core.orchestrator import BuildContext, BuildOrchestrator, BuildReport
from asc.code_generation.code_emitter import CodeEmitter
from asc.config.config import CONFIG_FILE_NAME
from asc.config.project import discover_entry_files, load_project_config
from asc.exceptions import ConfigError
from asc.interpreter.core.evaluator import Evaluator
from asc.parser.core.parser import parse_script
from asc.utils import TerminalColors


def transpile(script_content: str, file_path: Optional[str] = None, orchestrator: Optional[BuildOrchestrator] = None) -> str:
    """Lexes, parses and emits one unit of source text."""
    program = parse_script(script_content, file_path=file_path)
    return CodeEmitter(file_path=file_path, orchestrator=orchestrator).emit(program)


def _single_file_out_dir(input_dir: str) -> str:
    """The outDir of ./asconfig.json when there is a usable one, else the input directory."""
    config_path = os.path.abspath(CONFIG_FILE_NAME)
    if not os.path.exists(config_path):
        return input_dir
    try:
        config = load_project_config(config_path)
    except ConfigError as e:
        print(f"{TerminalColors.YELLOW}WARNING: failed to read {CONFIG_FILE_NAME}: {e.core_message} Falling back to input directory.{TerminalColors.RESET}", file=sys.stderr)
        return input_dir
    return os.path.join(os.path.dirname(config_path), config.out_dir)


def compile_file(file_path: str, out_dir: Optional[str] = None, quiet: bool = False) -> str:
    """
    Compiles a single entry file, writing it and everything it imports.
    The project root is the file's own directory.
    """
    absolute_path = os.path.abspath(file_path)
    if not os.path.isfile(absolute_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    project_root = os.path.dirname(absolute_path)
    out_dir = os.path.abspath(out_dir) if out_dir else _single_file_out_dir(project_root)
    os.makedirs(out_dir, exist_ok=True)

    orchestrator = BuildOrchestrator(BuildContext(project_root=project_root, out_dir=out_dir), quiet=quiet)
    return orchestrator.compile(absolute_path)


def build_project(config_path: str = CONFIG_FILE_NAME, quiet: bool = False) -> BuildReport:
    """Builds every entry file named by the configuration, isolating per-entry failures."""
    config_path = os.path.abspath(config_path)
    config = load_project_config(config_path)

    project_root = os.path.dirname(config_path)
    out_dir = os.path.join(project_root, config.out_dir)
    entry_files = discover_entry_files(config, project_root)

    os.makedirs(out_dir, exist_ok=True)
    orchestrator = BuildOrchestrator(BuildContext(project_root=project_root, out_dir=out_dir), quiet=quiet)
    report = orchestrator.build(entry_files)

    if not quiet:
        print(f"\nBuild finished. Output in: {out_dir}")
    return report


def run_script(script_content: str, file_path: Optional[str] = None, output: Optional[TextIO] = None) -> Any:
    """Parses and interprets a script, returning the value of its last statement."""
    program = parse_script(script_content, file_path=file_path)
    return Evaluator(output=output, file_path=file_path).run(program)


def run_file(file_path: str, output: Optional[TextIO] = None) -> Any:
    absolute_path = os.path.abspath(file_path)
    program = ModuleLoader().load(absolute_path)
    return Evaluator(output=output, file_path=absolute_path).run(program)
