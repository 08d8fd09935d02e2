"""
Purchase order service -- create, list, confirm.

Quantities are never checked against the aggregated requirement:
over- and under-ordering are allowed, and one line is enough to mark
an ingredient as assigned for the target date.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping

from django.db import transaction
from django.utils import timezone

from canteen.exceptions import CanteenError
from canteen.models import Ingredient, PurchaseOrder, PurchaseOrderItem, Supplier
from canteen.services.inputs import coerce_date, coerce_quantity

logger = logging.getLogger(__name__)


def _as_pk(value) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _resolve_supplier(supplier) -> Supplier:
    if isinstance(supplier, Supplier):
        return supplier
    try:
        return Supplier.objects.get(pk=supplier)
    except (Supplier.DoesNotExist, ValueError, TypeError):
        raise CanteenError("SUPPLIER_NOT_FOUND", supplier_id=supplier)


def create_purchase_order(
    target_date: date | str,
    supplier,
    lines: Iterable[Mapping],
    user=None,
    notes: str = "",
) -> PurchaseOrder:
    """
    Create a draft purchase order dated today for ``target_date``.

    Args:
        target_date: Menu date the order covers
        supplier: Supplier instance or id
        lines: Mappings with ingredient_id, quantity, optional unit and remark.
            unit defaults to the ingredient's canonical unit.
        user: User who created the order (optional)

    Returns:
        The created PurchaseOrder
    """
    target_date = coerce_date(target_date, field="target_date")
    supplier = _resolve_supplier(supplier)

    lines = list(lines or [])
    if not lines:
        raise CanteenError("EMPTY_ORDER", target_date=str(target_date))

    # Validate everything before writing
    ingredients = Ingredient.objects.in_bulk(
        [pk for pk in (_as_pk(line.get("ingredient_id")) for line in lines) if pk]
    )

    items = []
    for line in lines:
        ingredient_id = line.get("ingredient_id")
        ingredient = ingredients.get(_as_pk(ingredient_id))
        if ingredient is None:
            raise CanteenError("INGREDIENT_NOT_FOUND", ingredient_id=ingredient_id)

        items.append(
            {
                "ingredient": ingredient,
                "quantity": coerce_quantity(line.get("quantity")),
                "unit": line.get("unit") or ingredient.unit,
                "remark": line.get("remark") or "",
            }
        )

    with transaction.atomic():
        order = PurchaseOrder.objects.create(
            date=timezone.localdate(),
            target_date=target_date,
            supplier=supplier,
            notes=notes,
            created_by=f"user:{user.username}" if user else "system",
        )
        PurchaseOrderItem.objects.bulk_create(
            [PurchaseOrderItem(order=order, **item) for item in items]
        )

    from canteen.signals import purchase_order_created

    purchase_order_created.send(sender=PurchaseOrder, order=order, user=user)

    logger.info(
        f"Created PurchaseOrder {order.code} with {len(items)} items",
        extra={
            "purchase_order": order.code,
            "target_date": str(target_date),
            "supplier": supplier.pk,
            "items": len(items),
        },
    )

    return order


def purchase_orders_for_date(target_date: date | str):
    """Purchase orders for a target date, newest first."""
    target_date = coerce_date(target_date, field="target_date")

    return (
        PurchaseOrder.objects.filter(target_date=target_date)
        .select_related("supplier")
        .prefetch_related("items__ingredient")
        .order_by("-created_at", "-id")
    )


def confirm_purchase_order(order: PurchaseOrder, user=None) -> PurchaseOrder:
    """Confirm a draft purchase order."""
    order.confirm(user)
    order.refresh_from_db()
    return order
