class ServiceError(Exception):
    """Base class for errors that surface as a failed request."""
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class BusinessException(ServiceError):
    """Invalid state or input, e.g. duplicate username or insufficient stock."""
    status_code = 400


class ResourceNotFoundException(ServiceError):
    status_code = 404


class AuthException(ServiceError):
    """Bad credentials or a deactivated account."""
    status_code = 401
