"""
Exceptions for AMeDAS data access and encoding.
"""


class AmedasError(Exception):
    """Base exception for AMeDAS-related errors."""

    pass


class AmedasConnectionError(AmedasError):
    """Error connecting to the AMeDAS endpoints."""

    pass


class AmedasQueryError(AmedasError):
    """Error in an AMeDAS request or response parsing."""

    pass


class CatalogError(AmedasError):
    """Invalid measurement catalog configuration."""

    pass
