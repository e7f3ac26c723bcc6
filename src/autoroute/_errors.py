"""Autoroute error hierarchy.

All autoroute-specific errors inherit from AutorouteError for easy catching.
"""


class AutorouteError(Exception):
    """Base error for all autoroute operations."""


class ConfigError(AutorouteError):
    """Invalid or missing configuration."""


class ScanError(AutorouteError):
    """A controller directory could not be listed."""


class RouteFileError(AutorouteError):
    """A route file cannot be registered (bad name, bad export, bad meta)."""
