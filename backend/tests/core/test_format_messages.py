"""Dispatcher message tests — the text callers learn the request shape from."""

from dynamic_space.core.domain_types import Operation
from dynamic_space.core.format_messages import (
    format_execution_error,
    format_missing_configuration,
    format_missing_parameters,
    format_missing_required,
    format_missing_space_name,
    format_mode_mismatch,
    format_unknown_operation,
)
from dynamic_space.core.markdown import code_span, escape_markdown, markdown_table


def test_unknown_operation_names_value_and_legal_set():
    text = format_unknown_operation("Delete", ["find", "view_parameters", "invoke"])
    assert 'Unknown operation: "Delete"' in text
    assert "Available operations: find, view_parameters, invoke" in text
    assert "no operation" in text


def test_mode_mismatch_points_to_alternative():
    text = format_mode_mismatch(Operation.FIND, Operation.DISCOVER)
    assert '"find"' in text
    assert 'Use "discover" instead.' in text


def test_missing_configuration_names_setting():
    assert format_missing_configuration("DYNAMIC_SPACE_DATA") == (
        "Error: DYNAMIC_SPACE_DATA environment variable is not set."
    )


def test_missing_space_name_examples_per_operation():
    view = format_missing_space_name(Operation.VIEW_PARAMETERS)
    invoke = format_missing_space_name(Operation.INVOKE)
    assert '"space_name"' in view
    assert '"operation": "view_parameters"' in view
    assert '"operation": "invoke"' in invoke
    assert '"parameters"' in invoke


def test_missing_parameters_echoes_space_name():
    text = format_missing_parameters("acme/sdxl")
    assert '"space_name": "acme/sdxl"' in text
    assert "JSON object string" in text
    assert "view_parameters" in text


def test_missing_required_lists_names():
    text = format_missing_required("a/b", "predict", ["prompt", "seed"])
    assert '"prompt", "seed"' in text
    assert "predict" in text


def test_execution_error_keeps_requested_spelling():
    assert format_execution_error("INVOKE", "boom") == "Error executing INVOKE: boom"


# --- Markdown helpers ---------------------------------------------------------

def test_escape_markdown_flattens_newlines():
    assert escape_markdown("a\n\nb | *c*") == "a b \\| \\*c\\*"


def test_escape_markdown_empty():
    assert escape_markdown(None) == ""


def test_code_span_drops_backticks():
    assert code_span("a`b") == "`ab`"


def test_markdown_table_shape():
    table = markdown_table(["A", "B"], [["1", "2"]])
    assert table.splitlines() == ["| A | B |", "|---|---|", "| 1 | 2 |"]
