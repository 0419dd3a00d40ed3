"""Usage Sections — composable markdown blocks for the no-operation help text.

Invariants:
    - Each section is a standalone markdown block ending without a trailing newline
    - Sections shared by both modes are defined once
    - Example JSON blocks are valid requests for the mode they appear in

Design Decisions:
    - Sections composed per mode in operation_mode.py: standard mode documents
      `find`, discover mode documents `discover`; the rest is identical
"""

TITLE = "# Gradio Space Interaction"

INTRO_STANDARD = (
    "Dynamically interact with any Gradio MCP Space. Find spaces, view space "
    "parameter schemas, and invoke spaces."
)

INTRO_DISCOVER = (
    "Interact with curated Gradio MCP Spaces. Discover available spaces, view "
    "parameter schemas, and invoke spaces."
)

SCHEMA_TYPES = """\
## Supported Schema Types

✅ **Simple types** (supported):
- Strings, numbers, booleans
- Enums (predefined value sets)
- Arrays of primitives
- Shallow objects (one level deep)
- FileData (as URL strings)"""

COMPLEX_SCHEMA_NOTE = (
    "To use spaces with complex schemas, add them from huggingface.co/settings/mcp."
)

OPERATIONS_HEADER = "## Available Operations"

OPERATION_FIND = """\
### find
Find MCP-enabled Spaces available for invocation based on task-focused or semantic searches.

**Example:**
```json
{
  "operation": "find",
  "search_query": "image generation",
  "limit": 10
}
```"""

OPERATION_DISCOVER = """\
### discover
List all available MCP-enabled Spaces.

**Example:**
```json
{
  "operation": "discover"
}
```"""

OPERATION_VIEW_PARAMETERS = """\
### view_parameters
Display the parameter schema for a space's first tool.

**Example:**
```json
{
  "operation": "view_parameters",
  "space_name": "evalstate/FLUX1_schnell"
}
```"""

OPERATION_INVOKE = """\
### invoke
Execute a space's first tool with provided parameters.

**Example:**
```json
{
  "operation": "invoke",
  "space_name": "evalstate/FLUX1_schnell",
  "parameters": "{\\"prompt\\": \\"a cute cat\\", \\"num_steps\\": 4}"
}
```"""

WORKFLOW_STANDARD = """\
## Workflow

1. **Find Spaces** - Use `find` to find MCP-enabled spaces for your task
2. **Inspect Parameters** - Use `view_parameters` to see what a space accepts
3. **Invoke the Space** - Use `invoke` with the required parameters"""

WORKFLOW_DISCOVER = """\
## Workflow

1. **Discover Spaces** - Use `discover` to see all available spaces
2. **Inspect Parameters** - Use `view_parameters` to see what a space accepts
3. **Invoke the Space** - Use `invoke` with the required parameters"""

FILE_HANDLING = """\
## File Handling

For parameters that accept files (FileData types):
- Provide a publicly accessible URL (http:// or https://)
- Example: `{"image": "https://example.com/photo.jpg"}`
- Outputs from one tool may be used as inputs to another"""

TIPS_SEARCH = (
    '- Focus searches on specific tasks (e.g., "video generation", "object detection")'
)

TIPS_COMMON = """\
- The tool automatically applies default values for optional parameters
- Unknown parameters generate warnings but are still passed through (permissive inputs)
- Enum parameters show all allowed values in view_parameters
- Required parameters are clearly marked and validated"""
