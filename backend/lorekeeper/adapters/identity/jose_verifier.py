"""Bearer token verification with python-jose.

Tokens are issued elsewhere; this adapter checks the signature and expiry
and reads the ``sub`` (user id) and ``role`` claims.
"""

from uuid import UUID

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from lorekeeper.core.access_control import Caller
from lorekeeper.core.exceptions import UnauthorizedException
from lorekeeper.core.shared_models import UserRole


class JoseTokenVerifier:
    """TokenVerifier backed by a shared signing key."""

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        """Initialize the verifier.

        Args:
            secret_key: Key the identity provider signs tokens with.
            algorithm: Expected signing algorithm.
        """
        self._secret_key = secret_key
        self._algorithm = algorithm

    def verify(self, token: str) -> Caller:
        """Decode the token and return its caller."""
        if not self._secret_key:
            raise UnauthorizedException("Token verification is not configured")
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True, "verify_aud": False},
            )
        except ExpiredSignatureError as e:
            raise UnauthorizedException("Token has expired") from e
        except JWTError as e:
            raise UnauthorizedException() from e

        try:
            return Caller(id=UUID(str(payload["sub"])), role=UserRole(payload.get("role", "USER")))
        except (KeyError, ValueError) as e:
            raise UnauthorizedException("Token is missing a valid subject or role") from e
