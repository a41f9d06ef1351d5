"""
Error kinds raised by the service layer.

The API layer maps each kind to an HTTP status and the response envelope.
"""
from enum import Enum


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotFound(ServiceError):
    status_code = 404


class NotAuthenticated(ServiceError):
    status_code = 401


class NotAuthorized(ServiceError):
    status_code = 403


class PolicyViolation(ServiceError):
    status_code = 400


class ValidationFailed(ServiceError):
    status_code = 400

    def __init__(self, message, fields=None):
        super().__init__(message)
        self.fields = fields or []


class UploadErrorKind(str, Enum):
    MISSING_FILE = "missing_file"
    WRONG_TYPE = "wrong_type"
    TOO_LARGE = "too_large"


class UploadRejected(ValidationFailed):
    def __init__(self, kind: UploadErrorKind, message):
        super().__init__(message)
        self.kind = kind


class UpstreamUnavailable(ServiceError):
    status_code = 500


class GeocodingError(UpstreamUnavailable):
    pass
