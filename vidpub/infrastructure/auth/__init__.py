"""Auth infrastructure."""
from vidpub.infrastructure.auth.tokens import get_bearer_token, make_jwt, validate_jwt

__all__ = ["get_bearer_token", "make_jwt", "validate_jwt"]
