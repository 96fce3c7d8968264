"""Command dispatcher: raw command string -> new model."""

from __future__ import annotations

from loguru import logger

from tabledeck.core.commands.executor import execute
from tabledeck.core.commands.tokenizer import parse
from tabledeck.core.models import AppModel


def run_command(model: AppModel, raw: str) -> AppModel:
    """Parse ``raw`` and execute it against ``model``."""
    action = parse(raw)
    logger.debug("Command {!r} -> {}", raw, action.kind)
    return execute(model, action)
