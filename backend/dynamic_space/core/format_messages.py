"""Dispatcher Messages — pure builders for every error/help text the router emits.

Invariants:
    - All functions are pure (no IO, no async)
    - Unknown-operation text names the offending value verbatim and lists the
      active mode's legal set in order
    - Missing-field messages embed a worked JSON example of a correct request;
      the missing-parameters example echoes the caller's own space_name
    - Failure text names the attempted operation as the caller sent it

Design Decisions:
    - Messages are part of the tool contract (callers are LLM agents that
      learn the request shape from them), so tests assert on their content
"""

from dynamic_space.core.domain_types import Operation

_NO_OPERATION_HINT = "Call this tool with no operation for full usage instructions."


def format_unknown_operation(requested: str, legal: list[str]) -> str:
    return (
        f'Unknown operation: "{requested}"\n'
        f"Available operations: {', '.join(legal)}\n"
        f"\n"
        f"{_NO_OPERATION_HINT}"
    )


def format_mode_mismatch(requested: Operation, suggested: Operation) -> str:
    return (
        f'The "{requested.value}" operation is not available in this mode. '
        f'Use "{suggested.value}" instead.'
    )


def format_missing_configuration(setting: str) -> str:
    return f"Error: {setting} environment variable is not set."


def format_missing_space_name(operation: Operation) -> str:
    """Missing space_name, with an example for view_parameters or invoke."""
    if operation == Operation.INVOKE:
        example = (
            '{\n'
            '  "operation": "invoke",\n'
            '  "space_name": "username/space-name",\n'
            '  "parameters": "{\\"param1\\": \\"value1\\"}"\n'
            '}'
        )
    else:
        example = (
            '{\n'
            f'  "operation": "{operation.value}",\n'
            '  "space_name": "username/space-name"\n'
            '}'
        )
    return (
        'Error: Missing required parameter: "space_name"\n'
        "\n"
        "Example:\n"
        f"```json\n{example}\n```"
    )


def format_missing_parameters(space_name: str) -> str:
    """Missing parameters blob; the example reuses the caller's space_name."""
    return (
        'Error: Missing required parameter: "parameters"\n'
        "\n"
        'The "parameters" field must be a JSON object string containing the space parameters.\n'
        "\n"
        "Example:\n"
        "```json\n"
        "{\n"
        '  "operation": "invoke",\n'
        f'  "space_name": "{space_name}",\n'
        '  "parameters": "{\\"param1\\": \\"value1\\", \\"param2\\": 42}"\n'
        "}\n"
        "```\n"
        "\n"
        'Use "view_parameters" to see what parameters this space accepts.'
    )


def format_invalid_parameters(space_name: str, detail: str) -> str:
    """`parameters` did not decode to a JSON object."""
    return (
        f'Error: Invalid "parameters" for {space_name}: {detail}\n'
        "\n"
        'The "parameters" field must be a JSON object string, for example:\n'
        "```json\n"
        "{\n"
        '  "operation": "invoke",\n'
        f'  "space_name": "{space_name}",\n'
        '  "parameters": "{\\"prompt\\": \\"a cute cat\\"}"\n'
        "}\n"
        "```"
    )


def format_missing_required(space_name: str, tool_name: str, missing: list[str]) -> str:
    names = ", ".join(f'"{m}"' for m in missing)
    return (
        f"Error: Missing required parameters for {space_name} ({tool_name}): {names}\n"
        "\n"
        f'Use "view_parameters" with "space_name": "{space_name}" to see the full schema.'
    )


def format_invalid_request(detail: str) -> str:
    return f"Invalid request: {detail}\n\n{_NO_OPERATION_HINT}"


def format_execution_error(requested: str, message: str) -> str:
    return f"Error executing {requested}: {message}"
