"""Identity provider adapters."""

from .base import AuthEvent, AuthVerificationError, IdentityProvider, IdentityUnavailableError
from .firebase_auth import FirebaseIdentityProvider
from .mock_auth import MockIdentityProvider

__all__ = [
    "AuthEvent",
    "AuthVerificationError",
    "IdentityProvider",
    "IdentityUnavailableError",
    "FirebaseIdentityProvider",
    "MockIdentityProvider",
]
