"""
Unit tests for the global error mapping.
"""

import json

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.errors import error_response, to_http_exception
from app.core.exceptions import (
    BadRequestError,
    HostError,
    HttpException,
    NotFoundError,
)


class TestToHttpException:
    """Tests for to_http_exception()."""

    def test_http_exception_passes_through(self):
        exc = BadRequestError("Invalid host")

        assert to_http_exception(exc) is exc

    def test_not_found_uses_reason_phrase(self):
        mapped = to_http_exception(NotFoundError())

        assert mapped.status_code == 404
        assert mapped.message == "Not Found"

    def test_request_validation_error_uses_first_message(self):
        exc = RequestValidationError(
            [{"loc": ("query", "url"), "msg": "Field required", "type": "missing"}]
        )

        mapped = to_http_exception(exc)

        assert mapped.status_code == 400
        assert mapped.message == "Field required"

    def test_starlette_http_exception(self):
        mapped = to_http_exception(StarletteHTTPException(status_code=405))

        assert mapped.status_code == 405
        assert mapped.message == "Method Not Allowed"

    def test_unclassified_error_is_generic_500(self):
        mapped = to_http_exception(ValueError("database password is hunter2"))

        assert mapped.status_code == 500
        assert mapped.message == "Internal Server Error"

    def test_unmapped_extraction_error_is_500(self):
        """HostError only becomes a 400 through the endpoint."""
        mapped = to_http_exception(HostError("https://x.invalid", "DNS"))

        assert mapped.status_code == 500


class TestErrorResponse:
    """Tests for error_response()."""

    def test_envelope_shape(self):
        response = error_response(HttpException(409))

        assert response.status_code == 409
        assert json.loads(response.body) == {
            "error": {
                "name": "HttpException",
                "message": "Conflict",
                "status": 409,
            }
        }

    def test_carries_exception_headers(self):
        exc = StarletteHTTPException(status_code=405, headers={"Allow": "GET"})

        response = error_response(exc)

        assert response.headers["allow"] == "GET"
