"""Tests for bearer token parsing and JWT validation."""

from datetime import timedelta

import pytest

from vidpub.domain.errors import AuthFailure
from vidpub.infrastructure.auth.tokens import get_bearer_token, make_jwt, validate_jwt

SECRET = "test-secret"


class TestGetBearerToken:
    def test_extracts_token(self):
        assert get_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert get_bearer_token("bearer tok") == "tok"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic dXNlcjpwdw=="])
    def test_rejects_missing_or_malformed(self, header):
        with pytest.raises(AuthFailure):
            get_bearer_token(header)


class TestJwt:
    def test_round_trip_subject(self):
        token = make_jwt("user-42", SECRET)
        assert validate_jwt(token, SECRET) == "user-42"

    def test_wrong_secret(self):
        token = make_jwt("user-42", SECRET)
        with pytest.raises(AuthFailure):
            validate_jwt(token, "other-secret")

    def test_expired(self):
        token = make_jwt("user-42", SECRET, expires_in=timedelta(seconds=-5))
        with pytest.raises(AuthFailure):
            validate_jwt(token, SECRET)

    def test_garbage(self):
        with pytest.raises(AuthFailure):
            validate_jwt("not-a-jwt", SECRET)
