"""Akkeris (management platform) adapter."""

from akabot.adapters.akkeris.client import AkkerisAPIError, AkkerisClient, AkkerisNotFound

__all__ = ["AkkerisAPIError", "AkkerisClient", "AkkerisNotFound"]
