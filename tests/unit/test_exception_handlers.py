"""Tests for the domain exception to HTTP status mapping."""

import pytest

from contentflow.core.exception_handlers import ERROR_CODE_STATUS, status_for
from contentflow.domain.exceptions import (
    ContentFlowException,
    PaymentGatewayException,
    ResourceAlreadyExistsException,
    ResourceInUseException,
    SqlNotConfiguredException,
    UnknownJobKindException,
    WrongAmountException,
)


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (WrongAmountException("p", 1), 400),
        (ResourceAlreadyExistsException("plan", "name", "x"), 409),
        (ResourceInUseException("flow", "f", "states"), 409),
        (PaymentGatewayException("down"), 502),
        (SqlNotConfiguredException(), 503),
        (UnknownJobKindException("x"), 500),
    ],
)
def test_status_for_domain_errors(exc: ContentFlowException, status: int) -> None:
    assert status_for(exc) == status


def test_unlisted_code_defaults_to_400() -> None:
    assert status_for(ContentFlowException("odd", error_code="SOMETHING_ELSE")) == 400


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = ContentFlowException("Something failed")
    assert exc.error_code == "ContentFlowException"
    assert exc.to_dict() == {"error": "ContentFlowException", "message": "Something failed", "details": {}}


def test_every_mapped_status_is_an_error() -> None:
    assert all(400 <= status < 600 for status in ERROR_CODE_STATUS.values())
