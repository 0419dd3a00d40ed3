"""Domain Types — enums and value types shared by the dispatcher layers.

Invariants:
    - Operation names are lower-case; callers may send any casing, the router
      lower-cases before comparing against these values
    - Mode has exactly two members; it is fixed for the process lifetime

Design Decisions:
    - str Enums: serialize to JSON (tool schemas, logs) without custom encoders
    - NewType for SpaceName: zero runtime cost, documents "author/name" strings
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

SpaceName = NewType("SpaceName", str)    # "author/space-name"


# ─── Enums ───────────────────────────────────────────────────────

class Mode(str, Enum):
    """Dispatcher mode: decided once from DYNAMIC_SPACE_DATA."""
    STANDARD = "standard"
    DISCOVER = "discover"


class Operation(str, Enum):
    """Every sub-operation name the dynamic_space tool schema knows about."""
    FIND = "find"
    DISCOVER = "discover"
    VIEW_PARAMETERS = "view_parameters"
    INVOKE = "invoke"
