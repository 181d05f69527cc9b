import pytest

from vaul.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from vaul.domain.errors import (
    BACKEND_UNAVAILABLE,
    NOT_FOUND,
    VALIDATION_REJECTED,
    BackendUnavailable,
    NotFound,
    ValidationRejected,
)
from vaul.usecases.error_mapping import map_store_error


def test_timeout_maps_to_backend_unavailable():
    err = map_store_error(ApiTimeoutError("slow", context="GET /commands"), context="Load commands")

    assert isinstance(err, BackendUnavailable)
    assert err.code == BACKEND_UNAVAILABLE
    assert err.message.startswith("Load commands")


@pytest.mark.parametrize(
    "status, expected",
    [(404, NotFound), (400, ValidationRejected), (409, ValidationRejected), (422, ValidationRejected)],
)
def test_client_errors_map_by_status(status, expected):
    err = map_store_error(
        ApiClientError("bad", status=status, hint="name taken"),
        context="Failed to create category",
    )

    assert isinstance(err, expected)
    assert err.message.endswith("name taken")


def test_auth_failures_are_backend_unavailable():
    err = map_store_error(ApiClientError("nope", status=401), context="Save command")

    assert isinstance(err, BackendUnavailable)
    assert "auth failed" in err.message


def test_server_and_generic_api_errors_are_backend_unavailable():
    assert isinstance(map_store_error(ApiServerError("boom", status=500), context="x"), BackendUnavailable)
    assert isinstance(map_store_error(ApiError("odd"), context="x"), BackendUnavailable)


def test_local_store_exceptions_map_to_codes():
    not_found = map_store_error(KeyError("Unknown category 'c9'"), context="Failed to delete category")
    rejected = map_store_error(ValueError("Category name is required"), context="Failed to create category")
    io_error = map_store_error(PermissionError("read-only"), context="Save command")

    assert not_found.code == NOT_FOUND
    assert not_found.message == "Failed to delete category: not found: Unknown category 'c9'"
    assert rejected.code == VALIDATION_REJECTED
    assert rejected.message == "Failed to create category: rejected: Category name is required"
    assert io_error.code == BACKEND_UNAVAILABLE


def test_use_case_errors_pass_through_unchanged():
    original = ValidationRejected("Command text is required.")

    assert map_store_error(original, context="Save command") is original


def test_unknown_exceptions_fall_back_to_backend_unavailable():
    err = map_store_error(RuntimeError("Invalid JSON response"), context="Load commands")

    assert isinstance(err, BackendUnavailable)
    assert err.message == "Load commands: failed: Invalid JSON response"
