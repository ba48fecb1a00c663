# crowdwatch/errors.py
"""
Error taxonomy shared by the store, services and routers.
Each error carries the HTTP status it maps to; main.py renders them as
{"detail": message}.
"""


class CrowdWatchError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CrowdWatchError):
    """Referenced gate, alert or video id does not exist."""
    status_code = 404


class ValidationError(CrowdWatchError):
    """Malformed upload or missing chat message text."""
    status_code = 400


class UnsupportedMediaType(CrowdWatchError):
    status_code = 415


class SizeLimitExceeded(CrowdWatchError):
    status_code = 413


class RangeNotSatisfiable(CrowdWatchError):
    status_code = 416


class InternalError(CrowdWatchError):
    """Unexpected failure in the store. Reported to callers generically."""
    status_code = 500
