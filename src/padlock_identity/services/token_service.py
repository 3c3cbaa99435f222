"""Random token generation for verification, reset and refresh tokens."""

import hashlib
import secrets

# 32 random bytes = 256 bits of entropy per token
DEFAULT_TOKEN_BYTES = 32


class TokenGenerator:
    """Cryptographically secure generator of opaque URL-safe tokens."""

    def __init__(self, nbytes: int = DEFAULT_TOKEN_BYTES):
        if nbytes < 18:
            # 18 bytes = 144 bits, the floor for refresh tokens
            msg = "Tokens need at least 18 random bytes"
            raise ValueError(msg)
        self._nbytes = nbytes

    def verification_token(self) -> str:
        return secrets.token_urlsafe(self._nbytes)

    def password_reset_token(self) -> str:
        return secrets.token_urlsafe(self._nbytes)

    def refresh_token(self) -> str:
        return secrets.token_urlsafe(self._nbytes)


def hash_token(raw_token: str) -> str:
    """Return the SHA-256 hex digest under which a raw token is stored."""
    return hashlib.sha256(raw_token.encode()).hexdigest()
