"""Token inspection for provider-issued access tokens."""

from question_bank.infrastructure.security.jwt import token_expiry, verify_token

__all__ = ["token_expiry", "verify_token"]
