"""Custom exception classes for the SkyBox server."""


class SkyBoxException(Exception):
    """
    Base exception class for all SkyBox errors.
    """
    pass


class ValidationError(SkyBoxException):
    """
    Raised when a request is missing a required field or carries an invalid value.
    """
    pass


class NotFoundError(SkyBoxException):
    """
    Raised when a document or blob does not exist.
    """
    pass


class UserNotFoundError(NotFoundError):
    """
    Raised when no user document matches the given email.
    """
    pass


class UnauthenticatedError(SkyBoxException):
    """
    Raised when there is no valid session for the request.
    """
    pass


class UnauthorizedError(SkyBoxException):
    """
    Raised when the session lacks permission for the requested operation.
    """
    pass


class ConflictError(SkyBoxException):
    """
    Raised when a document with the same id already exists.
    """
    pass


class BackendUnavailableError(SkyBoxException):
    """
    Raised when the backend service is unreachable or fails transiently.
    """
    pass


class QuotaExceededError(SkyBoxException):
    """
    Raised when blob storage reports the storage limit was reached.
    """
    pass


class OtpDeliveryError(SkyBoxException):
    """
    Raised when the backend did not hand back an account id for an email code.
    """
    pass
