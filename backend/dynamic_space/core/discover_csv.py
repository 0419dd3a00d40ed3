"""Discovery CSV — parsing and rendering of the curated space list.

Invariants:
    - One space per non-blank line: spaceId, category, description
    - Commas inside double quotes do not split; `""` inside quotes is a literal `"`
    - Every field is whitespace-trimmed after parsing
    - Rows with an empty spaceId are skipped and are not counted
    - No header row: the first line is data

Design Decisions:
    - Hand-written line parser instead of the csv module: the source is a
      loose hand-edited list (unbalanced quotes must still yield a row, never raise)
"""

from dataclasses import dataclass

from dynamic_space.core.markdown import code_span, escape_markdown, markdown_table

SPACE_URL_BASE = "https://hf.co/spaces"

RESULTS_HEADER = """\
# Available Spaces

These MCP-enabled Spaces can be invoked using the `dynamic_space` tool.
Use `"operation": "view_parameters"` to inspect a space's parameters before invoking.

"""

NO_DATA = "No spaces available in the dynamic spaces list."

_TABLE_HEADERS = ["Space", "Category", "Description", "Space ID"]


@dataclass(frozen=True)
class DiscoveredSpace:
    """One row of the discovery list."""
    space_id: str
    category: str = ""
    description: str = ""

    @property
    def short_name(self) -> str:
        return self.space_id.split("/")[-1] or self.space_id


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line, honouring double-quoted fields."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current).strip())
    return fields


def split_lines(text: str) -> list[str]:
    """Non-blank lines of the document."""
    return [line for line in text.strip().split("\n") if line.strip()]


def parse_discovery_csv(text: str) -> list[DiscoveredSpace]:
    spaces = []
    for line in split_lines(text):
        fields = parse_csv_line(line) + ["", ""]
        space_id, category, description = fields[0], fields[1], fields[2]
        if not space_id:
            continue
        spaces.append(DiscoveredSpace(space_id, category, description))
    return spaces


def render_discovery_table(spaces: list[DiscoveredSpace]) -> str:
    rows = [
        [
            f"[{escape_markdown(s.short_name)}]({SPACE_URL_BASE}/{s.space_id})",
            escape_markdown(s.category or "-"),
            escape_markdown(s.description or "No description"),
            code_span(s.space_id),
        ]
        for s in spaces
    ]
    return RESULTS_HEADER + markdown_table(_TABLE_HEADERS, rows)


def format_fetch_error(url: str, error: str) -> str:
    return f"Error fetching spaces from {url}: {error}"
