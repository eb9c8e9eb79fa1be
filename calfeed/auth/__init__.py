"""Magic-link and session-token authentication."""

from calfeed.auth.issuer import CredentialIssuer
from calfeed.auth.verifier import CredentialVerifier

__all__ = [
    "CredentialIssuer",
    "CredentialVerifier",
]
