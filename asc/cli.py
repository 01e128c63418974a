import argparse
import os
import sys

from .build.core.module_loader import ModuleLoader
from .compiler import build_project, compile_file, run_file
from .config.config import CONFIG_FILE_NAME, SOURCE_EXTENSION
from .config.project import create_default_config
from .exceptions import AScriptError, ConfigError
from .utils import TerminalColors, dump_artifact

USAGE = f"""Usage:
  asc init                  # create {CONFIG_FILE_NAME} with defaults
  asc build [config]        # build project using {CONFIG_FILE_NAME} (default: ./{CONFIG_FILE_NAME})
  asc run <file{SOURCE_EXTENSION}>          # run a single file with the interpreter
  asc ast <file{SOURCE_EXTENSION}>          # print the parsed AST as JSON
  asc <file{SOURCE_EXTENSION}> [-o DIR]     # compile a single file (and its imports)
  asc lsp                   # start the language server on stdio (needs the "lsp" extra)
"""

COMMANDS = ("init", "build", "run", "ast", "lsp")


def _fail(message: str) -> int:
    print(f"{TerminalColors.RED}{message}{TerminalColors.RESET}", file=sys.stderr)
    return 1


def _build_parser(command: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"asc {command}" if command in COMMANDS else "asc", usage=USAGE)
    if command == "build":
        parser.add_argument("config", nargs="?", default=CONFIG_FILE_NAME, help="The path to the project configuration.")
    elif command in ("run", "ast"):
        parser.add_argument("input_file", help=f"The path to the input {SOURCE_EXTENSION} file.")
    elif command not in COMMANDS:
        parser.add_argument("input_file", help=f"The path to the input {SOURCE_EXTENSION} file.")
        parser.add_argument("-o", "--out-dir", dest="out_dir", help="The directory to write the compiled output to.")
    return parser


def _init() -> int:
    if create_default_config(CONFIG_FILE_NAME):
        print(f"{TerminalColors.GREEN}{CONFIG_FILE_NAME} created{TerminalColors.RESET}")
        print(f"Put your {SOURCE_EXTENSION} files into the rootDir (default: src/) and run `asc build`.")
    else:
        print(f"{TerminalColors.YELLOW}{CONFIG_FILE_NAME} already exists{TerminalColors.RESET}")
    return 0


def _build(config_path: str) -> int:
    try:
        report = build_project(config_path)
    except ConfigError as e:
        return _fail(f"--- CONFIGURATION ERROR ---\n{e}")
    # Per-entry failures were already reported by the build and do not fail the invocation.
    if report.failed:
        print(f"{TerminalColors.YELLOW}{len(report.failed)} entry file(s) failed to compile.{TerminalColors.RESET}")
    return 0


def _run(input_file: str) -> int:
    try:
        run_file(input_file)
    except FileNotFoundError:
        return _fail(f"File not found: {input_file}")
    except AScriptError as e:
        return _fail(f"\n--- RUNTIME ERROR ---\n{e}")
    return 0


def _ast(input_file: str) -> int:
    try:
        program = ModuleLoader().load(os.path.abspath(input_file))
    except FileNotFoundError:
        return _fail(f"File not found: {input_file}")
    except AScriptError as e:
        return _fail(f"\n--- COMPILATION ERROR ---\n{e}")
    print(dump_artifact(program))
    return 0


def _compile(input_file: str, out_dir) -> int:
    try:
        compile_file(input_file, out_dir=out_dir)
    except FileNotFoundError:
        return _fail(f"File not found: {input_file}")
    except AScriptError as e:
        return _fail(f"\n--- COMPILATION ERROR ---\n{e}")
    print(f"\n{TerminalColors.GREEN}--- Compilation Successful ---{TerminalColors.RESET}")
    return 0


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        if os.path.exists(CONFIG_FILE_NAME):
            return _build(CONFIG_FILE_NAME)
        print(USAGE)
        return 1

    command = argv[0]
    args = _build_parser(command).parse_args(argv[1:] if command in COMMANDS else argv)

    if command == "init":
        return _init()
    if command == "build":
        return _build(args.config)
    if command == "run":
        return _run(args.input_file)
    if command == "ast":
        return _ast(args.input_file)
    if command == "lsp":
        from .server import start_server

        start_server()
        return 0
    return _compile(args.input_file, args.out_dir)


if __name__ == "__main__":
    sys.exit(main())
