"""
Input coercion shared by the services.

Dates arrive as ``date`` objects or ``YYYY-MM-DD`` strings, quantities as
Decimal, int, float or numeric strings.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from canteen.exceptions import CanteenError


def coerce_date(value, field: str = "date") -> date:
    """Return ``value`` as a date or raise CanteenError('INVALID_DATE')."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str) or not value.strip():
        raise CanteenError("INVALID_DATE", field=field, value=value)
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise CanteenError("INVALID_DATE", field=field, value=value)


def coerce_quantity(value, field: str = "quantity") -> Decimal:
    """Return ``value`` as a non-negative Decimal or raise CanteenError('INVALID_QUANTITY')."""
    if value is None or value == "" or isinstance(value, bool):
        raise CanteenError("INVALID_QUANTITY", field=field, value=value)
    try:
        quantity = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise CanteenError("INVALID_QUANTITY", field=field, value=value)
    if not quantity.is_finite() or quantity < 0:
        raise CanteenError("INVALID_QUANTITY", field=field, value=value)
    return quantity
