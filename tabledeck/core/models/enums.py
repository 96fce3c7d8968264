"""Shared enumerations used across the core."""

from __future__ import annotations

from enum import StrEnum

# -- Columns -----------------------------------------------------------------


class ColumnKind(StrEnum):
    """Declared column type.  Interpretation of cell values is left to the UI."""

    TEXT = "text"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    DATE = "date"
    SELECT = "select"


# -- Navigation --------------------------------------------------------------


class ViewMode(StrEnum):
    TABLE = "table"
    KANBAN = "kanban"


# -- Command language --------------------------------------------------------


class PathKind(StrEnum):
    """Shape of a classified path fragment."""

    ROOT = "root"
    ABSOLUTE = "absolute"
    ASCEND = "ascend"
    DESCEND = "descend"
