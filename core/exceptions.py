"""
Core — Exception Handling

Typed business errors and the DRF exception handler that renders them
into the standard error envelope.

Workflow services return these errors inside a ``Result`` instead of
raising them; views call ``Result.unwrap()`` which raises, and the
handler below takes it from there.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('stockbook')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class StockbookError(APIException):
    """Base for business errors. ``extra`` is merged into the envelope."""

    extra: dict = {}


class BusinessRuleViolation(StockbookError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class ValidationFailed(BusinessRuleViolation):
    """Input rejected before any transaction was opened."""

    default_detail = 'Invalid input.'
    default_code = 'VALIDATION_FAILED'

    def __init__(self, detail=None, field: str | None = None):
        super().__init__(detail=detail)
        self.field = field
        self.extra = {'field': field} if field else {}


class InvalidStateTransition(BusinessRuleViolation):
    default_detail = 'Invalid state transition.'
    default_code = 'INVALID_STATE_TRANSITION'

    def __init__(self, current=None, requested=None, detail=None):
        if detail is None and current is not None:
            detail = f'Cannot move from {current} to {requested}.'
        super().__init__(detail=detail)
        self.current = current
        self.requested = requested
        self.extra = {'current': current, 'requested': requested} if current is not None else {}


class InsufficientStockError(StockbookError):
    """An outbound movement would take a product below zero."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Insufficient stock for this operation.'
    default_code = 'INSUFFICIENT_STOCK'

    def __init__(self, product_id=None, required=None, available=None, *,
                 product_name: str | None = None, detail=None):
        if detail is None and product_id is not None:
            detail = (
                f'Insufficient stock for {product_name or product_id}. '
                f'Required: {required}, Available: {available}'
            )
        super().__init__(detail=detail)
        self.product_id = product_id
        self.required = required
        self.available = available
        if product_id is not None:
            self.extra = {
                'product_id': str(product_id),
                'required': str(required),
                'available': str(available),
            }


class ResourceNotFoundError(StockbookError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ValidationError):
        data = {
            'success': False,
            'errors': exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages},
            'code': 'VALIDATION_ERROR',
        }
        return Response(data, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            {'success': False, 'errors': {'detail': ['Internal server error.']}, 'code': 'INTERNAL_ERROR'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = getattr(exc, 'default_code', 'ERROR')
    if isinstance(response.data, dict):
        errors = response.data
    elif isinstance(response.data, list):
        errors = {'detail': response.data}
    else:
        errors = {'detail': [str(response.data)]}

    extra = getattr(exc, 'extra', None)
    if extra:
        errors.update(extra)

    response.data = {
        'success': False,
        'errors': errors,
        'code': code,
    }
    return response
