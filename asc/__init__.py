"""AScript: a small scripting language with an interpreter and a JavaScript transpiler."""

__version__ = "1.0.0"
