"""
Farm Console Exceptions

Error taxonomy shared by the Resource Client, the record stores and the
page views:

- TransportError: the upstream API could not be reached
- HttpError: the upstream API answered with a non-2xx status
- RecordValidationError: a record or form payload failed its schema
- RecordNotFound: a mutation targeted an id the collection does not hold
- ModalStateError: an illegal modal transition (e.g. opening twice)
"""


class FarmApiError(Exception):
    """Base exception for farm console errors"""
    default_code = 'FARM_API_ERROR'

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}


class TransportError(FarmApiError):
    """Network unreachable, connection refused or unreadable response."""
    default_code = 'CONNECTION_ERROR'


class HttpError(FarmApiError):
    """Non-2xx response from the upstream API."""
    default_code = 'HTTP_ERROR'

    def __init__(self, status_code: int, message: str, details: dict = None):
        super().__init__(message, details=details)
        self.status_code = status_code


class RecordValidationError(FarmApiError):
    """Malformed record or form input."""
    default_code = 'VALIDATION_ERROR'

    def __init__(self, message: str, errors: dict = None):
        super().__init__(message, details={'fields': errors or {}})
        self.errors = errors or {}


class RecordNotFound(FarmApiError):
    default_code = 'NOT_FOUND'


class ModalStateError(FarmApiError):
    default_code = 'MODAL_STATE'
