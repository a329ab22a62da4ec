"""TokenVerifier protocol: bearer token to caller identity.

Token issuance and password handling belong to the identity provider; this
service only verifies tokens and trusts the identity they carry.
"""

from typing import Protocol, runtime_checkable

from lorekeeper.core.access_control import Caller


@runtime_checkable
class TokenVerifier(Protocol):
    """Verifies bearer tokens."""

    def verify(self, token: str) -> Caller:
        """Return the caller a token identifies.

        Raises:
            UnauthorizedException: The token is malformed, expired or forged.
        """
        ...
