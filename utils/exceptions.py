"""
Typed business errors raised by the service layer
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class ClinicError(APIException):
    """Base class; `errors` carries optional structured details for the client"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'bad_request'

    def __init__(self, detail=None, errors=None, code=None):
        super().__init__(detail=detail, code=code)
        self.errors = errors


class BadRequest(ClinicError):
    pass


class Unauthorized(ClinicError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'
    default_code = 'unauthorized'


class Forbidden(ClinicError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden'
    default_code = 'forbidden'


class NotFound(ClinicError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found'
    default_code = 'not_found'


class Conflict(ClinicError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class UnprocessableEntity(ClinicError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'Validation failed'
    default_code = 'unprocessable'
