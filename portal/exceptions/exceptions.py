"""Custom exceptions - SoC principle"""


class PortalError(Exception):
    """Base exception for the admin portal"""
    pass


class UnauthenticatedError(PortalError):
    """No valid session, or the session lacks a resolved institution"""
    pass


class InvalidCredentialsError(UnauthenticatedError):
    """Credential check failed"""
    pass


class NotFoundError(PortalError):
    """Entity missing or not visible within the caller's institution"""
    pass


class ValidationError(PortalError):
    """Input validation error"""
    pass
