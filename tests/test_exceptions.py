"""Tests for the exception hierarchy and HTTP mapping."""

import pytest

from neo_session.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DuplicateEmailError,
    EmptyInputError,
    InvalidCredentialsError,
    InvalidSessionError,
    InvalidTokenError,
    MalformedHashError,
    MissingTokenError,
    NeoSessionError,
    TokenError,
    TokenExpiredError,
    TokenMalformedError,
    UserNotFoundError,
    ValidationError,
    create_error_response,
    get_http_status_code,
)
from neo_session.core.exceptions import http_mapping


class TestExceptionHierarchy:

    def test_error_code_defaults_to_class_name(self):
        error = DuplicateEmailError("Email already in use")

        assert error.error_code == "DuplicateEmailError"
        assert error.details == {}
        assert str(error) == "Email already in use"

    def test_families(self):
        assert issubclass(EmptyInputError, ValidationError)
        assert issubclass(InvalidSessionError, AuthenticationError)
        assert issubclass(TokenExpiredError, TokenError)
        assert issubclass(MalformedHashError, NeoSessionError)
        assert not issubclass(TokenError, AuthenticationError)

    def test_error_response(self):
        error = ValidationError("Email is required", details={"field": "email"})

        assert create_error_response(error) == {
            "error": {
                "code": "ValidationError",
                "message": "Email is required",
                "details": {"field": "email"},
                "type": "ValidationError",
            }
        }


class TestHttpMapping:

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (ValidationError("x"), 400),
            (EmptyInputError("x"), 400),
            (InvalidCredentialsError("x"), 401),
            (MissingTokenError("x"), 401),
            (InvalidSessionError("x"), 401),
            (InvalidTokenError("x"), 401),
            (TokenExpiredError("x"), 401),
            (TokenMalformedError("x"), 401),
            (UserNotFoundError("x"), 404),
            (DuplicateEmailError("x"), 409),
            (ConfigurationError("x"), 500),
            (MalformedHashError("x"), 500),
            (RuntimeError("x"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert get_http_status_code(error) == status_code

    def test_subclass_inherits_status(self):
        class CustomTokenError(TokenExpiredError):
            pass

        assert get_http_status_code(CustomTokenError("x")) == 401

    def test_overrides(self):
        assert get_http_status_code(UserNotFoundError("x"), overrides={UserNotFoundError: 401}) == 401

    def test_package_exports_mapping_function(self):
        assert get_http_status_code is http_mapping.get_http_status_code
