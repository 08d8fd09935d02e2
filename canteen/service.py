"""
Canteen Service - Thin public facade over services and models.

Every operation returns an ActionResult and never raises:
- invalid input (CanteenError) → success=False with a descriptive message
- store failures (DatabaseError) → logged, success=False with the message

No retries: the caller decides whether to call again.

Usage:
    from canteen import kitchen

    result = kitchen.procurement_data("2025-01-01")
    if result.success:
        for item in result.data.pending:
            print(f"{item.ingredient_name}: {item.total_quantity} {item.unit}")
    else:
        print(result.code, result.error)

    kitchen.create_purchase_order(
        "2025-01-01",
        supplier.pk,
        [{"ingredient_id": potato.pk, "quantity": 18, "unit": "kg"}],
    )
"""

import logging
from datetime import date
from functools import wraps

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from canteen.analytics import MenuAnalytics
from canteen.exceptions import CanteenError
from canteen.models import PurchaseOrder
from canteen.results import ActionResult, ProcurementData
from canteen.services import aggregation, menus, procurement

logger = logging.getLogger(__name__)


def boundary(func):
    """Turn exceptions of a facade operation into failure results."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        operation = func.__name__
        try:
            return ActionResult.ok(func(*args, **kwargs))
        except CanteenError as e:
            logger.info(
                f"[{operation}] rejected: {e}",
                extra={"operation": operation, "error_code": e.code},
            )
            return ActionResult.fail(e.message, e.code, **e.details)
        except ValidationError as e:
            logger.warning(
                f"[{operation}] validation failed: {e.messages}",
                extra={"operation": operation},
            )
            return ActionResult.fail("; ".join(e.messages), "VALIDATION_ERROR")
        except DatabaseError as e:
            logger.exception(
                f"[{operation}] store operation failed",
                extra={"operation": operation},
            )
            return ActionResult.fail(str(e) or f"Failed to {operation}", "STORE_ERROR")

    return wrapper


class Kitchen:
    """
    Main API for Canteen (thin wrapper).

    Business rules live in the models and services; this class adds the
    error boundary and evaluates querysets inside it.
    """

    # ══════════════════════════════════════════════════════════════
    # PROCUREMENT
    # ══════════════════════════════════════════════════════════════

    @staticmethod
    @boundary
    def aggregate(target_date: date | str):
        """Aggregated ingredient demand of the submitted menus of a date."""
        return aggregation.aggregate_ingredients(target_date)

    @staticmethod
    @boundary
    def assigned_ids(target_date: date | str):
        """Ingredient ids already on a purchase order for a date."""
        return aggregation.assigned_ingredient_ids(target_date)

    @staticmethod
    @boundary
    def pending(target_date: date | str):
        """Aggregated ingredients not yet on any purchase order (待采购)."""
        return aggregation.pending_ingredients(
            aggregation.aggregate_ingredients(target_date),
            aggregation.assigned_ingredient_ids(target_date),
        )

    @staticmethod
    @boundary
    def procurement_data(target_date: date | str):
        """
        Everything the procurement screen needs for a date.

        Returns:
            ActionResult[ProcurementData]
        """
        aggregated = aggregation.aggregate_ingredients(target_date)
        assigned = aggregation.assigned_ingredient_ids(target_date)

        return ProcurementData(
            aggregated_ingredients=aggregated,
            purchase_orders=list(procurement.purchase_orders_for_date(target_date)),
            assigned_ids=assigned,
            pending=aggregation.pending_ingredients(aggregated, assigned),
        )

    @staticmethod
    @boundary
    def purchase_orders(target_date: date | str):
        return list(procurement.purchase_orders_for_date(target_date))

    @staticmethod
    @boundary
    def create_purchase_order(
        target_date: date | str,
        supplier_id,
        lines: list[dict],
        user=None,
        notes: str = "",
    ):
        """Create a draft purchase order (see services.procurement)."""
        return procurement.create_purchase_order(
            target_date, supplier_id, lines, user=user, notes=notes
        )

    @staticmethod
    @boundary
    def confirm_purchase_order(order: PurchaseOrder, user=None):
        return procurement.confirm_purchase_order(order, user=user)

    @staticmethod
    @boundary
    def procurement_coverage(target_date: date | str):
        return MenuAnalytics.procurement_coverage(target_date)

    # ══════════════════════════════════════════════════════════════
    # MENUS
    # ══════════════════════════════════════════════════════════════

    @staticmethod
    @boundary
    def save_menu(data: dict, user=None):
        """Create or replace a menu (see services.menus.save_menu)."""
        return menus.save_menu(data, user=user)

    @staticmethod
    @boundary
    def submit_menu(menu_date: date | str, canteen: str, meal: str, user=None):
        return menus.submit_menu(menu_date, canteen, meal, user=user)

    @staticmethod
    @boundary
    def delete_menu(menu_date: date | str, canteen: str, meal: str):
        menus.delete_menu(menu_date, canteen, meal)

    @staticmethod
    @boundary
    def menus_by_date(menu_date: date | str):
        return list(menus.menus_by_date(menu_date))

    @staticmethod
    @boundary
    def menus_by_range(start: date | str, end: date | str):
        return list(menus.menus_by_range(start, end))

    @staticmethod
    @boundary
    def menu_stats(start: date | str, end: date | str):
        """Per-date menu counts by status (calendar badges)."""
        return MenuAnalytics.stats_by_date(start, end)
