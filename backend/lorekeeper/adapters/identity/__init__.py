"""Identity adapters."""

from lorekeeper.adapters.identity.fake import FakeTokenVerifier
from lorekeeper.adapters.identity.jose_verifier import JoseTokenVerifier

__all__ = ["JoseTokenVerifier", "FakeTokenVerifier"]
