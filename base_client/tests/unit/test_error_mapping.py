from __future__ import annotations

import pytest
from requests import exceptions as req_exc

from base_client.adapters.response_executor import ResponseExecutor
from base_client.adapters.transport_mock import FakeResponse, FakeTransport
from base_client.domain.errors import ClientError, ServerError
from base_client.domain.ports import UseCaseError
from base_client.usecases.error_mapping import map_response_error


def test_map_invalid_parameters_uses_hint() -> None:
    err = ClientError("ctx", status=422, hint="A1: voltage missing")

    mapped = map_response_error(422, err)

    assert isinstance(mapped, UseCaseError)
    assert mapped.code == "INVALID_PARAMS"
    assert mapped.message == "Invalid parameters: A1: voltage missing"
    assert mapped.__cause__ is err


def test_map_auth_failure_hides_body() -> None:
    err = ClientError("token expired at 12:00", status=401)

    mapped = map_response_error(401, err)

    assert mapped.code == "AUTH_FAILED"
    assert mapped.message == "Auth failed / API key invalid."


def test_map_not_found_keeps_request_id_in_meta() -> None:
    err = ClientError("no such item", status=404, request_id="abc123")

    mapped = map_response_error(404, err)

    assert mapped.code == "NOT_FOUND"
    assert mapped.message == "Resource not found: no such item"
    assert mapped.meta == {"status": 404, "request_id": "abc123"}


def test_map_unlisted_client_status_is_request_failed() -> None:
    mapped = map_response_error(418, ClientError("teapot", status=418))

    assert mapped.code == "REQUEST_FAILED"
    assert mapped.message == "Request failed (HTTP 418): teapot"


def test_map_server_error() -> None:
    mapped = map_response_error(500, ServerError("trace...", status=500))

    assert mapped.code == "SERVER_ERROR"
    assert mapped.message == "Server error, try again."


def test_map_passes_through_unclassified_errors() -> None:
    err = ValueError("not ours")

    assert map_response_error(400, err) is err


def test_executor_with_mapping_raises_use_case_error() -> None:
    transport = FakeTransport([FakeResponse(409, b'{"detail": "slot busy"}')])
    executor = ResponseExecutor(
        transport, error_transform=map_response_error, request_id_header="X-Request-Id"
    )

    with pytest.raises(UseCaseError) as info:
        executor.execute_void("req")

    assert info.value.code == "CONFLICT"
    assert info.value.message == "Conflict: slot busy"
    assert isinstance(info.value.__cause__, ClientError)


def test_executor_with_mapping_leaves_transport_errors_alone() -> None:
    failure = req_exc.ConnectionError("dns failure")
    executor = ResponseExecutor(
        FakeTransport([failure]), error_transform=map_response_error
    )

    with pytest.raises(req_exc.ConnectionError) as info:
        executor.execute_string("req")

    assert info.value is failure
