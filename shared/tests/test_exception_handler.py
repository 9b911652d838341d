import pytest
from rest_framework import status
from rest_framework.exceptions import ValidationError

from shared.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    TransientError,
)
from shared.infrastructure.exception_handler import domain_exception_handler


@pytest.mark.parametrize(
    "error,expected",
    [
        (NotFoundError("Vehicle 7 not found"), status.HTTP_404_NOT_FOUND),
        (ConflictError(), status.HTTP_409_CONFLICT),
        (ForbiddenError(), status.HTTP_403_FORBIDDEN),
        (InvalidInputError("Invalid date format. Use YYYY-MM-DD."), status.HTTP_400_BAD_REQUEST),
        (InvalidTransitionError("Cannot change booking status"), status.HTTP_400_BAD_REQUEST),
        (TransientError(), status.HTTP_503_SERVICE_UNAVAILABLE),
    ],
)
def test_domain_errors_map_to_status(error, expected):
    response = domain_exception_handler(error, {})

    assert response.status_code == expected
    assert response.data == {"detail": error.message, "code": error.code}


def test_transient_error_asks_client_to_retry():
    response = domain_exception_handler(TransientError(), {})
    assert response["Retry-After"] == "1"


def test_other_errors_fall_through_to_drf():
    response = domain_exception_handler(ValidationError({"end_date": ["bad"]}), {})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data == {"end_date": ["bad"]}
