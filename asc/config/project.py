"""
The project configuration (`asconfig.json`) consumed by whole-project builds,
plus discovery of the entry files it names.
"""

import json
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from asc.exceptions import ConfigError, ErrorCode

from .config import CONFIG_FILE_NAME, SOURCE_EXTENSION


class ProjectConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    root_dir: str = Field(default="src", alias="rootDir")
    out_dir: str = Field(default="dist", alias="outDir")
    include: List[str] = Field(default_factory=lambda: [f"**/*{SOURCE_EXTENSION}"])
    files: Optional[List[str]] = None
    # Accepted for compatibility with existing config files; there is no strict mode yet.
    strict: bool = True

    @field_validator("include")
    @classmethod
    def check_relative_patterns(cls, patterns: List[str]) -> List[str]:
        # pathlib globbing only accepts non-empty patterns relative to rootDir.
        for pattern in patterns:
            if not pattern.strip():
                raise ValueError("include patterns must not be empty")
            if os.path.isabs(pattern) or pattern.startswith(("/", "\\")):
                raise ValueError(f"include pattern '{pattern}' must be relative to rootDir")
        return patterns


DEFAULT_CONFIG = ProjectConfig()


def load_project_config(config_path: str) -> ProjectConfig:
    """Reads and validates a project configuration file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = f.read()
    except FileNotFoundError as e:
        raise ConfigError(ErrorCode.CONFIG_NOT_FOUND, path=config_path) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(ErrorCode.CONFIG_INVALID_JSON, path=config_path, reason=str(e)) from e

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        reason = "; ".join(f"{'.'.join(str(loc) for loc in err['loc']) or 'config'}: {err['msg']}" for err in e.errors())
        raise ConfigError(ErrorCode.CONFIG_INVALID, path=config_path, reason=reason) from e


def _is_source_file(path: Path) -> bool:
    return path.is_file() and path.suffix == SOURCE_EXTENSION


def discover_entry_files(config: ProjectConfig, project_root: str) -> List[str]:
    """
    Returns the sorted, absolute entry files of a project.

    An explicit, non-empty `files` list wins; otherwise the `include` patterns
    are matched under `rootDir`; without patterns every source file under
    `rootDir` is an entry.
    """
    root = Path(project_root)
    if config.files:
        return sorted({os.path.abspath(root / f) for f in config.files})

    source_root = root / config.root_dir
    if not source_root.is_dir():
        return []

    if config.include:
        matched = set()
        for pattern in config.include:
            matched.update(os.path.abspath(p) for p in source_root.glob(pattern) if _is_source_file(p))
        return sorted(matched)

    return sorted(os.path.abspath(p) for p in source_root.rglob(f"*{SOURCE_EXTENSION}") if _is_source_file(p))


def create_default_config(config_path: str = CONFIG_FILE_NAME) -> bool:
    """Writes the default configuration. Returns False if the file already exists."""
    if os.path.exists(config_path):
        return False
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(DEFAULT_CONFIG.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    return True
