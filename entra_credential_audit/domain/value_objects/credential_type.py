"""Credential type value object."""

from enum import StrEnum


class CredentialType(StrEnum):
    """Type of credential in an Entra ID application."""

    SECRET = "Secret"
    CERTIFICATE = "Certificate"

    def __str__(self) -> str:
        return self.value
