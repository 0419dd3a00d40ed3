"""Operation Mode — mode resolution and the per-mode legal operation sets.

Invariants:
    - resolve_mode() is a pure function of the data-source location:
      non-blank -> DISCOVER, absent/blank -> STANDARD
    - STANDARD and DISCOVER sets differ only on find/discover and share
      view_parameters/invoke
    - Operation matching is case-insensitive (names are lower-cased first)
    - Set order is the order used when error text enumerates legal operations

Design Decisions:
    - Mode carried as a ModeProfile (operations + usage text + description)
      instead of `if discover_mode` branches spread through the router
    - MODE_ALTERNATIVES is a separate table: a name the generic tool schema
      accepts but the active mode redirects gets its own message
"""

from dataclasses import dataclass

from dynamic_space.core.domain_types import Mode, Operation
from dynamic_space.core import usage_sections as _s


STANDARD_OPERATIONS: tuple[Operation, ...] = (
    Operation.FIND,
    Operation.VIEW_PARAMETERS,
    Operation.INVOKE,
)

DISCOVER_OPERATIONS: tuple[Operation, ...] = (
    Operation.DISCOVER,
    Operation.VIEW_PARAMETERS,
    Operation.INVOKE,
)

# (active mode, requested operation) -> operation to use instead
MODE_ALTERNATIVES: dict[tuple[Mode, Operation], Operation] = {
    (Mode.DISCOVER, Operation.FIND): Operation.DISCOVER,
}


@dataclass(frozen=True)
class ModeProfile:
    """Everything the router needs to know about one mode."""
    mode: Mode
    operations: tuple[Operation, ...]
    usage_instructions: str
    tool_description: str

    @property
    def operation_names(self) -> list[str]:
        return [op.value for op in self.operations]


def resolve_mode(data_source_url: str | None) -> Mode:
    """DISCOVER when a data-source location is configured, STANDARD otherwise."""
    if data_source_url and data_source_url.strip():
        return Mode.DISCOVER
    return Mode.STANDARD


def normalize_operation(name: str) -> str:
    return name.lower()


def allowed_operations(mode: Mode) -> tuple[Operation, ...]:
    return _PROFILES[mode].operations


def is_allowed_operation(mode: Mode, name: str) -> bool:
    """Case-insensitive membership test against the mode's legal set."""
    normalized = normalize_operation(name)
    return any(op.value == normalized for op in allowed_operations(mode))


def mode_alternative(mode: Mode, name: str) -> Operation | None:
    """Operation to suggest when `name` is schema-legal but redirected in `mode`."""
    normalized = normalize_operation(name)
    for (alt_mode, requested), suggested in MODE_ALTERNATIVES.items():
        if alt_mode == mode and requested.value == normalized:
            return suggested
    return None


def get_mode_profile(mode: Mode) -> ModeProfile:
    return _PROFILES[mode]


def _build_usage(mode: Mode) -> str:
    """Assemble the help text returned when no operation is given."""
    if mode == Mode.DISCOVER:
        sections = [
            _s.TITLE,
            _s.INTRO_DISCOVER,
            _s.SCHEMA_TYPES,
            _s.OPERATIONS_HEADER,
            _s.OPERATION_DISCOVER,
            _s.OPERATION_VIEW_PARAMETERS,
            _s.OPERATION_INVOKE,
            _s.WORKFLOW_DISCOVER,
            _s.FILE_HANDLING,
            "## Tips\n\n" + _s.TIPS_COMMON,
        ]
    else:
        sections = [
            _s.TITLE,
            _s.INTRO_STANDARD,
            _s.SCHEMA_TYPES + "\n\n" + _s.COMPLEX_SCHEMA_NOTE,
            _s.OPERATIONS_HEADER,
            _s.OPERATION_FIND,
            _s.OPERATION_VIEW_PARAMETERS,
            _s.OPERATION_INVOKE,
            _s.WORKFLOW_STANDARD,
            _s.FILE_HANDLING,
            "## Tips\n\n" + _s.TIPS_SEARCH + "\n" + _s.TIPS_COMMON,
        ]
    return "\n\n".join(sections) + "\n"


_DESCRIPTION_SUFFIX = "Call with no operation for full usage instructions."

_PROFILES: dict[Mode, ModeProfile] = {
    Mode.STANDARD: ModeProfile(
        mode=Mode.STANDARD,
        operations=STANDARD_OPERATIONS,
        usage_instructions=_build_usage(Mode.STANDARD),
        tool_description=(
            "Find (semantic/task search), inspect (view parameter schema) and "
            "dynamically invoke Gradio MCP Spaces to perform various ML Tasks. "
            + _DESCRIPTION_SUFFIX
        ),
    ),
    Mode.DISCOVER: ModeProfile(
        mode=Mode.DISCOVER,
        operations=DISCOVER_OPERATIONS,
        usage_instructions=_build_usage(Mode.DISCOVER),
        tool_description=(
            "Discover available spaces, inspect (view parameter schema) and "
            "invoke Gradio MCP Spaces to perform various ML Tasks. "
            + _DESCRIPTION_SUFFIX
        ),
    ),
}
