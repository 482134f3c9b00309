try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from monnify.core.errors import (
    AuthenticationError,
    ConfigurationError,
    MonnifyError,
    MonnifyException,
    ProtocolException,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (MonnifyException("denied", 401), "authentication"),
        (MonnifyException("denied", 0, "AUTH_FAILED"), "authentication"),
        (MonnifyException("bad", 400), "validation"),
        (MonnifyException("missing", 404), "not_found"),
        (MonnifyException("missing", 200, "NOT_FOUND"), "not_found"),
        (MonnifyException("boom", 503), "server"),
        (MonnifyException("odd", 409), "general"),
    ],
)
def test_error_type_classification(exc: MonnifyException, expected: str) -> None:
    assert exc.error_type == expected


def test_formatted_message_includes_error_code() -> None:
    assert MonnifyException("System error", 500, "99").formatted_message == "[99] System error"
    assert MonnifyException("Plain", 500).formatted_message == "Plain"


def test_validation_error_names_the_field() -> None:
    exc = ValidationError("must be positive", "amount")

    assert exc.field == "amount"
    assert exc.code == 400
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.message == "Field 'amount': must be positive"
    assert exc.is_validation_error
    assert isinstance(exc, MonnifyException)


def test_protocol_exception_is_not_a_business_failure() -> None:
    exc = ProtocolException(200)

    assert exc.status_code == 200
    assert str(exc) == "Unexpected Response Structure"
    assert not isinstance(exc, MonnifyException)
    assert isinstance(exc, MonnifyError)


def test_authentication_and_configuration_share_the_base() -> None:
    auth = AuthenticationError("expired")

    assert auth.error_code == "AUTH_FAILED"
    assert auth.is_authentication_error
    assert issubclass(ConfigurationError, MonnifyError)
    assert not issubclass(ConfigurationError, MonnifyException)
