"""
Authentication: identities and pluggable request authenticators.
"""

from .identity import Authenticator, Identity, UserIdentity
from .authenticators import StaticTokenAuthenticator, unauthorized_response

__all__ = [
    "Authenticator",
    "Identity",
    "UserIdentity",
    "StaticTokenAuthenticator",
    "unauthorized_response",
]
