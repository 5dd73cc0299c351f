import logging

from django.core.exceptions import PermissionDenied
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    """Duplicate favorite, or an order that can no longer be cancelled."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflicting state.'
    default_code = 'conflict'


class EmptyCart(APIException):
    """Checkout attempted with nothing in the cart."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Cart is empty.'
    default_code = 'empty_cart'


class StoreFailure(APIException):
    """Persistence failure. Not retried, checkout has no idempotency key."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Server error, please try again later.'
    default_code = 'store_failure'


def api_exception_handler(exc, context):
    """
    DRF exception handler with a flat {"error": ..., "code": ...} body.
    Database errors become StoreFailure; validation errors keep their
    per-field detail under "fields".
    """
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.exception("STORE FAILURE — view: %s | %s", type(view).__name__, exc)
        exc = StoreFailure()
    elif isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            'error': _first_message(exc.detail),
            'code': 'invalid',
            'fields': exc.detail,
        }
    else:
        response.data = {
            'error': str(exc.detail),
            'code': getattr(exc.detail, 'code', None) or exc.default_code,
        }
    return response


def _first_message(detail):
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)
