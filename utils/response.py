"""
Unified response envelope helpers and the global exception handler
"""
import logging
import math

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.http import Http404
from django.utils import timezone
from rest_framework import status
from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _timestamp():
    return timezone.now().isoformat()


def success_response(data=None, message='success', code=200):
    """Success envelope"""
    return Response({
        'success': True,
        'message': message,
        'data': data,
        'timestamp': _timestamp(),
    }, status=code)


def error_response(message='error', code=400, errors=None):
    """Error envelope, returned with the real HTTP status"""
    body = {
        'success': False,
        'message': message,
        'statusCode': code,
        'timestamp': _timestamp(),
    }
    if errors is not None:
        body['errors'] = errors
    return Response(body, status=code)


def get_page_params(request, default_size=10):
    """Read page / page_size from the query string, clamped to sane bounds"""
    max_size = settings.CLINIC['MAX_PAGE_SIZE']
    try:
        page = int(request.query_params.get('page', 1))
    except (TypeError, ValueError):
        page = 1
    try:
        page_size = int(request.query_params.get('page_size', default_size))
    except (TypeError, ValueError):
        page_size = default_size
    if page <= 0:
        page = 1
    if page_size <= 0:
        page_size = default_size
    return page, min(page_size, max_size)


def paginated_response(queryset, serializer_class, request, message='success', context=None):
    """Manual pagination: {count, page, page_size, total_pages, results}"""
    page, page_size = get_page_params(request)
    total = queryset.count()
    start = (page - 1) * page_size
    serializer = serializer_class(queryset[start:start + page_size], many=True, context=context or {'request': request})
    return success_response({
        'count': total,
        'page': page,
        'page_size': page_size,
        'total_pages': math.ceil(total / page_size) if total else 0,
        'results': serializer.data,
    }, message)


def _first_message(detail):
    """Pull a readable message out of a (possibly nested) DRF error detail"""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return 'Validation failed'
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else 'Validation failed'
    return str(detail)


def custom_exception_handler(exc, context):
    """Map every exception raised by a view onto the error envelope"""
    if isinstance(exc, (Http404, ObjectDoesNotExist)):
        exc = drf_exceptions.NotFound(str(exc) or 'Resource not found')

    if isinstance(exc, drf_exceptions.ValidationError):
        return error_response(
            message=_first_message(exc.detail),
            code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            errors=exc.detail,
        )

    response = exception_handler(exc, context)
    if response is not None:
        detail = getattr(exc, 'detail', str(exc))
        errors = getattr(exc, 'errors', None)
        result = error_response(
            message=_first_message(detail),
            code=response.status_code,
            errors=errors,
        )
        # keep auth headers such as WWW-Authenticate
        for key, value in response.items():
            result[key] = value
        return result

    view = context.get('view')
    logger.exception('Unhandled error in %s', view.__class__.__name__ if view else 'view')
    message = str(exc) if settings.DEBUG else 'Internal server error'
    return error_response(message=message, code=status.HTTP_500_INTERNAL_SERVER_ERROR)
