"""Command language for the core.

This package contains the command pipeline, leaves first:

- **tokenizer**: Raw command string -> action, path fragment classification
- **resolver**: Path fragment + navigation state -> new navigation state
- **structure**: CRUD handlers for workspaces, tables, rows and columns
- **executor**: (model, action) -> new model, the sole mutation entry point
- **dispatcher**: Raw command string -> new model
"""

from tabledeck.core.commands.dispatcher import run_command
from tabledeck.core.commands.executor import execute
from tabledeck.core.commands.tokenizer import classify_path, parse

__all__ = ["classify_path", "execute", "parse", "run_command"]
