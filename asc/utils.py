"""
Utility helpers for the AScript toolchain: terminal coloring and a JSON
serializer for compiler artifacts (ASTs and tokens).
"""

import json
from enum import Enum

from pydantic import BaseModel


class TerminalColors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    RESET = "\033[0m"


def _tagged(value):
    """Recursively converts models to dicts tagged with their class name."""
    if isinstance(value, BaseModel):
        return {"type": type(value).__name__, **{name: _tagged(getattr(value, name)) for name in type(value).model_fields}}
    if isinstance(value, (list, tuple)):
        return [_tagged(item) for item in value]
    return value


class CompilerArtifactEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, BaseModel):
            return _tagged(o)
        if isinstance(o, Enum):
            return o.value
        if isinstance(o, set):
            return sorted(o)
        return super().default(o)


def dump_artifact(artifact) -> str:
    return json.dumps(artifact, indent=2, cls=CompilerArtifactEncoder)
