"""Error hierarchy tests — class-level metadata and the REST envelope."""

from dynamic_space.core.errors import (
    DynamicSpaceError,
    ErrorContext,
    HubAPIError,
    SpaceNotFoundError,
    UpstreamTimeoutError,
)


def test_subclasses_share_the_base():
    assert issubclass(SpaceNotFoundError, DynamicSpaceError)
    assert issubclass(HubAPIError, DynamicSpaceError)


def test_not_found_envelope():
    error = SpaceNotFoundError("acme/gone", context=ErrorContext(operation="invoke", space_name="acme/gone"))
    body = error.to_response()["error"]
    assert error.http_status == 404
    assert body["code"] == "SPACE_NOT_FOUND"
    assert body["category"] == "resource_not_found"
    assert body["context"] == {"operation": "invoke", "space_name": "acme/gone"}


def test_hub_error_message_includes_status():
    error = HubAPIError("Service Unavailable", status_code=503)
    assert error.status_code == 503
    assert error.message == "Hub API error (HTTP 503: Service Unavailable)"
    assert error.severity.value == "critical"


def test_timeout_message_formats_seconds():
    assert UpstreamTimeoutError("https://x", 30.0).message.endswith("after 30s")
