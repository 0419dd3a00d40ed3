"""Parameter Schema — normalisation, rendering and argument coercion for space tools.

Invariants:
    - parse_tool_schema() accepts both Gradio schema layouts:
      {tool_name: json_schema} and [{name, description, inputSchema}]
    - Only the FIRST tool of a space is used (view_parameters and invoke agree)
    - coerce_arguments() never drops a caller-supplied key: unknown keys pass
      through with a warning
    - Absent optional parameters with a schema default get that default;
      absent required parameters without a default are reported, not invented

Design Decisions:
    - Coercion is permissive (string "4" -> 4 for integer): LLM callers often
      stringify numbers inside the JSON-encoded parameters blob
    - Values that cannot be coerced are forwarded unchanged with a warning;
      the space itself is the final validator
"""

import json
from dataclasses import dataclass, field
from typing import Any

from dynamic_space.core.errors import SpaceSchemaError
from dynamic_space.core.markdown import code_span, escape_markdown, markdown_table

_NO_DEFAULT = object()

_EXAMPLE_VALUES: dict[str, Any] = {
    "string": "example text",
    "integer": 1,
    "number": 0.5,
    "boolean": True,
    "array": [],
    "object": {},
}


@dataclass(frozen=True)
class ParameterSpec:
    """One input property of a space tool."""
    name: str
    type: str
    required: bool
    description: str = ""
    default: Any = _NO_DEFAULT
    enum: tuple = ()

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT


@dataclass(frozen=True)
class SpaceToolSchema:
    """First MCP tool exposed by a space."""
    tool_name: str
    description: str
    parameters: tuple[ParameterSpec, ...]

    def get(self, name: str) -> ParameterSpec | None:
        for spec in self.parameters:
            if spec.name == name:
                return spec
        return None


@dataclass
class CoercionOutcome:
    arguments: dict[str, Any]
    warnings: list[str] = field(default_factory=list)
    missing_required: list[str] = field(default_factory=list)


# ─── Normalisation ───────────────────────────────────────────────

def _tool_entries(raw: Any) -> list[tuple[str, str, dict]]:
    """(name, description, input_schema) triples in declaration order."""
    if isinstance(raw, dict) and isinstance(raw.get("tools"), list):
        raw = raw["tools"]
    entries = []
    if isinstance(raw, list):
        for item in raw:
            if not isinstance(item, dict) or not item.get("name"):
                continue
            schema = item.get("inputSchema") or item.get("input_schema") or {}
            entries.append((item["name"], item.get("description") or "", schema))
    elif isinstance(raw, dict):
        for name, value in raw.items():
            if not isinstance(value, dict):
                continue
            schema = value.get("inputSchema") or value
            entries.append((name, value.get("description") or "", schema))
    return entries


def _property_type(prop: dict) -> str:
    declared = prop.get("type")
    if isinstance(declared, list):
        declared = next((t for t in declared if t != "null"), None)
    if not declared:
        for option in prop.get("anyOf") or prop.get("oneOf") or []:
            if isinstance(option, dict) and option.get("type") not in (None, "null"):
                declared = option["type"]
                break
    return declared or "any"


def parse_tool_schema(space_name: str, raw: Any) -> SpaceToolSchema:
    """Normalise a Gradio MCP schema document into the first tool's schema."""
    entries = _tool_entries(raw)
    if not entries:
        raise SpaceSchemaError(space_name, "no MCP tools exposed")
    tool_name, description, input_schema = entries[0]
    properties = input_schema.get("properties") or {}
    required = set(input_schema.get("required") or [])
    params = tuple(
        ParameterSpec(
            name=name,
            type=_property_type(prop),
            required=name in required,
            description=prop.get("description") or "",
            default=prop["default"] if "default" in prop else _NO_DEFAULT,
            enum=tuple(prop.get("enum") or ()),
        )
        for name, prop in properties.items()
        if isinstance(prop, dict)
    )
    return SpaceToolSchema(tool_name, description, params)


# ─── Rendering ───────────────────────────────────────────────────

def _example_value(spec: ParameterSpec) -> Any:
    if spec.enum:
        return spec.enum[0]
    if spec.has_default:
        return spec.default
    return _EXAMPLE_VALUES.get(spec.type, "value")


def build_invoke_example(space_name: str, schema: SpaceToolSchema) -> str:
    """Ready-to-send invoke request using required parameters (all if none required)."""
    chosen = [p for p in schema.parameters if p.required] or list(schema.parameters)
    params = {p.name: _example_value(p) for p in chosen}
    request = {
        "operation": "invoke",
        "space_name": space_name,
        "parameters": json.dumps(params),
    }
    return json.dumps(request, indent=2)


def format_parameters(space_name: str, schema: SpaceToolSchema) -> str:
    lines = [f"# Parameters for {space_name}", "", f"**Tool:** {code_span(schema.tool_name)}"]
    if schema.description:
        lines += ["", schema.description]
    lines.append("")

    if not schema.parameters:
        lines.append("This tool takes no parameters.")
    else:
        rows = [
            [
                code_span(p.name),
                escape_markdown(p.type),
                "✅" if p.required else "",
                code_span(json.dumps(p.default)) if p.has_default else "-",
                escape_markdown(p.description) or "-",
            ]
            for p in schema.parameters
        ]
        lines.append(markdown_table(
            ["Parameter", "Type", "Required", "Default", "Description"], rows,
        ))
        enums = [p for p in schema.parameters if p.enum]
        if enums:
            lines.append("## Allowed Values")
            lines.append("")
            for p in enums:
                values = ", ".join(code_span(json.dumps(v)) for v in p.enum)
                lines.append(f"- {code_span(p.name)}: {values}")
            lines.append("")

    lines += [
        "## Example",
        "",
        "```json",
        build_invoke_example(space_name, schema),
        "```",
    ]
    return "\n".join(lines) + "\n"


# ─── Coercion ────────────────────────────────────────────────────

def _coerce_number(value: str, integer: bool) -> int | float:
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        number = float(text)
    if integer:
        if not number.is_integer():
            raise ValueError(f"{value!r} is not an integer")
        return int(number)
    return number


def coerce_value(spec: ParameterSpec, value: Any) -> Any:
    """Convert `value` toward the declared type. Raises ValueError when impossible."""
    kind = spec.type
    if kind in ("integer", "number"):
        if isinstance(value, bool):
            raise ValueError(f"expected {kind}, got boolean")
        if isinstance(value, str):
            return _coerce_number(value, kind == "integer")
        if kind == "integer" and isinstance(value, float) and value.is_integer():
            return int(value)
        return value
    if kind == "boolean" and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        raise ValueError(f"{value!r} is not a boolean")
    if kind in ("array", "object") and isinstance(value, str):
        decoded = json.loads(value)
        expected = list if kind == "array" else dict
        if not isinstance(decoded, expected):
            raise ValueError(f"expected {kind}")
        return decoded
    if kind == "string" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def coerce_arguments(schema: SpaceToolSchema, supplied: dict[str, Any]) -> CoercionOutcome:
    """Apply type coercion, defaults and required checks to decoded parameters."""
    outcome = CoercionOutcome(arguments={})
    for name, value in supplied.items():
        spec = schema.get(name)
        if spec is None:
            outcome.warnings.append(
                f'Unknown parameter "{name}" is not declared by '
                f'"{schema.tool_name}"; passing it through unchanged.'
            )
            outcome.arguments[name] = value
            continue
        try:
            coerced = coerce_value(spec, value)
        except ValueError as e:
            outcome.warnings.append(f'Parameter "{name}" could not be converted to {spec.type}: {e}')
            coerced = value
        if spec.enum and coerced not in spec.enum:
            outcome.warnings.append(
                f'Parameter "{name}" value {json.dumps(coerced)} is not one of the allowed values.'
            )
        outcome.arguments[name] = coerced

    for spec in schema.parameters:
        if spec.name in outcome.arguments:
            continue
        if spec.has_default:
            outcome.arguments[spec.name] = spec.default
        elif spec.required:
            outcome.missing_required.append(spec.name)
    return outcome
