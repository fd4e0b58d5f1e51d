from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import (
    ApplicationError,
    InvalidRequestError,
    NotFoundError,
    PersistenceError,
    UnauthenticatedError,
    UpstreamError,
    UpstreamUnavailableError,
    global_exception_handler,
)

factory = APIRequestFactory()


class DummyView:
    pass


def _context(request):
    return {"request": request, "view": DummyView()}


def test_application_error_returns_structured_response():
    request = factory.get("/api/example/")
    exc = ApplicationError(
        "CONFLICT",
        "Line already exists",
        status_code=status.HTTP_409_CONFLICT,
        details={"productId": "abc123"},
    )
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_409_CONFLICT
    assert payload["code"] == "CONFLICT"
    assert payload["message"] == "Line already exists"
    assert payload["details"] == {"productId": "abc123"}


def test_error_taxonomy_maps_to_codes_and_statuses():
    request = factory.get("/api/cart/")
    cases = [
        (UnauthenticatedError(), "UNAUTHORIZED", 401),
        (InvalidRequestError("symptoms must not be empty"), "VALIDATION_ERROR", 400),
        (NotFoundError("Cart line not found"), "NOT_FOUND", 404),
        (PersistenceError("connection refused"), "SERVICE_UNAVAILABLE", 503),
        (UpstreamUnavailableError(), "SERVICE_UNAVAILABLE", 503),
        (UpstreamError(), "BAD_GATEWAY", 502),
    ]
    for exc, code, http_status in cases:
        response = global_exception_handler(exc, _context(request))
        assert response.status_code == http_status
        assert response.data["error"]["code"] == code


def test_persistence_error_surfaces_store_message():
    request = factory.get("/api/cart/")
    response = global_exception_handler(
        PersistenceError("could not connect to server"), _context(request)
    )
    assert response.data["error"]["message"] == "could not connect to server"


def test_upstream_errors_only_carry_generic_messages():
    request = factory.post("/api/assistant/advice/", {}, format="json")
    unavailable = global_exception_handler(UpstreamUnavailableError(), _context(request))
    failed = global_exception_handler(UpstreamError(), _context(request))
    assert unavailable.data["error"]["message"] == (
        "The health assistant is not available right now"
    )
    assert failed.data["error"]["message"] == (
        "Failed to generate health recommendations. Please try again."
    )
    assert "details" not in failed.data["error"]


def test_validation_error_preserves_details():
    request = factory.post("/api/example/", data={})
    exc = ValidationError({"field": ["This field is required."]})
    response = global_exception_handler(exc, _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"] == "Validation failed"
    assert payload["details"] == {"field": ["This field is required."]}


def test_not_authenticated_maps_to_unauthorized():
    request = factory.get("/api/cart/")
    response = global_exception_handler(NotAuthenticated(), _context(request))
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.data["error"]["code"] == "UNAUTHORIZED"


def test_unhandled_exception_returns_generic_message():
    request = factory.get("/api/example/")
    response = global_exception_handler(RuntimeError("boom"), _context(request))
    payload = response.data["error"]
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert payload["code"] == "SERVER_ERROR"
    assert payload["message"] == "Something went wrong"
    assert "details" not in payload
