"""Unit tests for TokenGenerator and hash_token."""

import re

import pytest

from padlock_identity.services import TokenGenerator, hash_token

URL_SAFE = re.compile(r"^[A-Za-z0-9_-]+$")


class TestTokenGenerator:
    def setup_method(self):
        self.tokens = TokenGenerator()

    def test_tokens_are_url_safe_and_256_bit(self):
        token = self.tokens.refresh_token()

        assert URL_SAFE.match(token)
        # 32 bytes encode to 43 unpadded base64 characters
        assert len(token) == 43

    def test_tokens_are_unique(self):
        generated = {self.tokens.verification_token() for _ in range(100)}

        assert len(generated) == 100

    def test_every_kind_of_token_is_generated(self):
        assert self.tokens.verification_token()
        assert self.tokens.password_reset_token()
        assert self.tokens.refresh_token()

    def test_too_few_bytes_rejected(self):
        with pytest.raises(ValueError, match="18 random bytes"):
            TokenGenerator(nbytes=16)


class TestHashToken:
    def test_digest_is_sha256_hex(self):
        digest = hash_token("raw-token")

        assert re.match(r"^[0-9a-f]{64}$", digest)

    def test_digest_is_deterministic(self):
        assert hash_token("raw-token") == hash_token("raw-token")
        assert hash_token("raw-token") != hash_token("raw-token2")
