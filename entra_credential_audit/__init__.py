"""Entra ID application credential expiration audit."""

__version__ = "1.0.0"
