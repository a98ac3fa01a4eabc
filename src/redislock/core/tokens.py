"""Ownership token generation.

Every lock handle carries a random token that is written as the key's value.
Each generator owns its random source; there is no process-wide seed.
"""

from __future__ import annotations

import random
import secrets

from redislock.core.constants import TOKEN_ALPHABET, TOKEN_LENGTH
from redislock.core.exceptions import ConfigurationError


class TokenGenerator:
    """Produce fixed-length tokens from an alphabet.

    Args:
        rng: Random source. Defaults to ``secrets.SystemRandom()``; pass a
            seeded ``random.Random`` for reproducible tokens.
        alphabet: Characters tokens are drawn from
        length: Number of characters per token
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        alphabet: str = TOKEN_ALPHABET,
        length: int = TOKEN_LENGTH,
    ):
        if not alphabet:
            raise ConfigurationError("Token alphabet must not be empty", field="alphabet")
        if length <= 0:
            raise ConfigurationError("Token length must be positive", field="length", details=f"got {length}")
        self._rng = rng if rng is not None else secrets.SystemRandom()
        self.alphabet = alphabet
        self.length = length

    def generate(self) -> str:
        return "".join(self._rng.choice(self.alphabet) for _ in range(self.length))


def generate_token(rng: random.Random | None = None) -> str:
    """Return one token using the protocol alphabet and length."""
    return TokenGenerator(rng).generate()
