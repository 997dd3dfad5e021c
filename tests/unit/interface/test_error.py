"""Unit tests for DomainError translation."""

import json

import pytest
from starlette.requests import Request

from tide.domain.error import (
    IllegalTransitionError,
    InsufficientBalanceError,
    NotFoundError,
    SelectionError,
    SelfActionError,
    ValidationError,
)
from tide.domain.value import ErrorKind, OfferAction, TruequeStatus
from tide.interface.error import STATUS_BY_KIND, domain_error_handler


def _request(path: str = "/offers") -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "scheme": "http",
            "server": ("testserver", 80),
            "path": path,
            "query_string": b"",
            "headers": [],
        }
    )


class TestDomainErrorHandler:
    """Tests for domain_error_handler."""

    def test_every_kind_has_a_status(self):
        assert set(STATUS_BY_KIND) == set(ErrorKind)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,status_code",
        [
            (ValidationError("Title must not be empty"), 422),
            (NotFoundError("Trueque", "abc"), 404),
            (SelectionError("Select a community and a user first"), 409),
            (
                IllegalTransitionError(
                    "abc", TruequeStatus.REJECTED, OfferAction.ACCEPT
                ),
                409,
            ),
            (SelfActionError("abc", "ana", OfferAction.REJECT), 403),
            (InsufficientBalanceError("carla", 2, 3), 409),
        ],
    )
    async def test_kind_and_detail_in_body(self, error, status_code):
        # Act
        response = await domain_error_handler(_request(), error)

        # Assert
        assert response.status_code == status_code
        assert json.loads(response.body) == {
            "kind": error.kind.value,
            "detail": str(error),
        }
