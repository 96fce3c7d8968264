"""Command grammar and tokenizer.

Turns a raw command line into an executor action::

    /s [path]                               select
    /select [path]                          select (long form)
    /v [path] (table|kanban) [by:<column>]  change view

Path fragments are only *classified* here (see ``classify_path``).  Whether
a token names an entity or is a 1-based index is decided by the resolver.

Anything that matches no rule becomes ``UnknownAction``, which the executor
treats as a no-op.
"""

from __future__ import annotations

import re

from loguru import logger

from tabledeck.core.models import (
    Action,
    ChangeViewAction,
    PathFragment,
    PathKind,
    SelectAction,
    UnknownAction,
    ViewMode,
)

_SELECT_RE = re.compile(r"^/(?:select|s)(?:\s+(?P<path>.*))?$", re.IGNORECASE | re.DOTALL)
_VIEW_RE = re.compile(r"^/v(?:\s+(?P<rest>.*))?$", re.IGNORECASE | re.DOTALL)
_VIEW_ARGS_RE = re.compile(
    r"^(?:(?P<path>.*)\s+)?(?P<mode>table|kanban)(?:\s+(?P<by>.*))?$",
    re.IGNORECASE | re.DOTALL,
)
_VIEW_ARGS_BY_RE = re.compile(
    r"^(?:(?P<path>.*?)\s+)?(?P<mode>table|kanban)\s+by:(?P<by>.*)$",
    re.IGNORECASE | re.DOTALL,
)
_BY_PREFIX_RE = re.compile(r"^by:\s*", re.IGNORECASE)
_ASCEND_RE = re.compile(r"^:+$")


def parse(raw: str) -> Action:
    """Classify a raw command string.  Never raises."""
    cmd = raw.strip()

    if m := _SELECT_RE.match(cmd):
        return SelectAction(path=_blank_to_none(m.group("path")))

    if m := _VIEW_RE.match(cmd):
        return _parse_view(_blank_to_none(m.group("rest")))

    logger.debug("Unrecognised command: {!r}", cmd)
    return UnknownAction(raw=cmd)


def _parse_view(rest: str | None) -> ChangeViewAction:
    if rest is None:
        return ChangeViewAction(mode=ViewMode.TABLE)

    # An explicit by: clause is anchored first so a column named like a view
    # keyword ("by:My table") is not mistaken for the mode.
    m = _VIEW_ARGS_BY_RE.match(rest) or _VIEW_ARGS_RE.match(rest)
    if m is None:
        # No view keyword: plain table view, the rest is ignored.
        return ChangeViewAction(mode=ViewMode.TABLE)

    by = _blank_to_none(m.group("by"))
    if by is not None:
        by = _blank_to_none(_BY_PREFIX_RE.sub("", by))

    return ChangeViewAction(
        mode=ViewMode(m.group("mode").lower()),
        path=_blank_to_none(m.group("path")),
        group_by=by,
    )


def classify_path(path: str | None) -> PathFragment:
    """Classify a path fragment without interpreting its tokens.

    - ``""`` / ``None``     -> root
    - ``":"``, ``"::"``...  -> ascend, ``depth`` = number of colons
    - ``":a[:b[:c]]"``      -> descend, relative to the current position
    - ``"a[:b[:c[:d]]]"``   -> absolute, from the workspace list

    Trailing colons are tolerated.  An empty segment anywhere else
    (``"Alpha::3"``) makes the address malformed: the fragment keeps its kind
    but carries no segments, which the resolver treats as a no-op.
    """
    text = (path or "").strip()
    if not text:
        return PathFragment(kind=PathKind.ROOT)

    if _ASCEND_RE.match(text):
        return PathFragment(kind=PathKind.ASCEND, depth=len(text))

    if text.startswith(":"):
        return PathFragment(kind=PathKind.DESCEND, segments=_split(text[1:]))

    return PathFragment(kind=PathKind.ABSOLUTE, segments=_split(text))


def _split(text: str) -> list[str]:
    parts = text.rstrip(":").split(":")
    if "" in parts:
        logger.debug("Malformed path, empty segment in {!r}", text)
        return []
    return parts


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
