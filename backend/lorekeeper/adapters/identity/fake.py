"""Fake token verifier for testing.

Maps literal token strings to callers so API tests can authenticate with
``Authorization: Bearer <name>`` without signing anything.
"""

from lorekeeper.core.access_control import Caller
from lorekeeper.core.exceptions import UnauthorizedException


class FakeTokenVerifier:
    """Test implementation of TokenVerifier."""

    def __init__(self) -> None:
        """Initialize with no known tokens."""
        self._tokens: dict[str, Caller] = {}
        self.verified: list[str] = []

    def seed(self, token: str, caller: Caller) -> None:
        """Register a token."""
        self._tokens[token] = caller

    def verify(self, token: str) -> Caller:
        """Return the seeded caller or reject the token."""
        self.verified.append(token)
        try:
            return self._tokens[token]
        except KeyError:
            raise UnauthorizedException() from None
