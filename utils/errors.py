class ServiceError(Exception):
    """Base class for errors raised by the service layer"""
    status_code = 500

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self):
        data = {'status': 'error', 'message': self.message}
        if self.code:
            data['code'] = self.code
        return data


class ValidationError(ServiceError):
    status_code = 400


class AuthenticationError(ServiceError):
    status_code = 401


class NotFoundError(ServiceError):
    status_code = 404


class InvalidTransitionError(ServiceError):
    status_code = 409
