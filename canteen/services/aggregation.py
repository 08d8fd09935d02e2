"""
Ingredient aggregation for procurement.

Given a target date, sums the ingredient usage lines of every submitted
menu of that date, grouped by ingredient, keeping the dishes each total
came from. Purchase orders for the same date mark ingredients as
assigned; what is left is the pending pool (待采购).

Usage:
    from canteen.services import aggregate_ingredients, assigned_ingredient_ids

    aggregated = aggregate_ingredients("2025-01-01")
    pending = pending_ingredients(aggregated, assigned_ingredient_ids("2025-01-01"))
    for item in pending:
        print(f"{item.ingredient_name}: {item.total_quantity} {item.unit}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from canteen.models import Menu, MenuStatus, PurchaseOrderItem
from canteen.services.inputs import coerce_date

logger = logging.getLogger(__name__)


@dataclass
class IngredientSource:
    """One usage line that contributed to an aggregated total."""

    dish_name: str
    menu_id: int
    quantity: Decimal


@dataclass
class AggregatedIngredient:
    """
    Total demand of one ingredient across the submitted menus of a day.

    ``unit`` is the unit of the first line seen. ``total_quantity`` sums
    every line whatever its unit; ``unit_totals`` keeps the per-unit sums.
    """

    ingredient_id: int
    ingredient_name: str
    total_quantity: Decimal
    unit: str
    sources: list[IngredientSource] = field(default_factory=list)
    unit_totals: dict[str, Decimal] = field(default_factory=dict)

    @property
    def has_mixed_units(self) -> bool:
        return len(self.unit_totals) > 1

    def add(self, quantity: Decimal, unit: str, dish_name: str, menu_id: int) -> None:
        self.total_quantity += quantity
        self.unit_totals[unit] = self.unit_totals.get(unit, Decimal("0")) + quantity
        self.sources.append(
            IngredientSource(dish_name=dish_name, menu_id=menu_id, quantity=quantity)
        )


def submitted_menus(target_date: date):
    """Submitted menus of a date with dishes and usage lines prefetched."""
    return (
        Menu.objects.filter(date=target_date, status=MenuStatus.SUBMITTED)
        .order_by("created_at", "id")
        .prefetch_related("dishes__ingredients__ingredient")
    )


def aggregate_ingredients(target_date: date | str) -> list[AggregatedIngredient]:
    """
    Aggregate ingredient demand for a date.

    Only submitted menus are read. Records come back in first-seen order.
    No rounding or unit conversion is applied.
    """
    target_date = coerce_date(target_date)

    ingredients: dict[int, AggregatedIngredient] = {}

    for menu in submitted_menus(target_date):
        for dish in menu.dishes.all():
            for line in dish.ingredients.all():
                aggregated = ingredients.get(line.ingredient_id)
                if aggregated is None:
                    aggregated = AggregatedIngredient(
                        ingredient_id=line.ingredient_id,
                        ingredient_name=line.ingredient.name,
                        total_quantity=Decimal("0"),
                        unit=line.unit,
                    )
                    ingredients[line.ingredient_id] = aggregated

                aggregated.add(line.quantity, line.unit, dish.name, menu.pk)

    result = list(ingredients.values())

    for aggregated in result:
        if aggregated.has_mixed_units:
            logger.warning(
                "Ingredient %s summed across units %s on %s",
                aggregated.ingredient_name,
                sorted(aggregated.unit_totals),
                target_date,
                extra={
                    "ingredient": aggregated.ingredient_id,
                    "target_date": str(target_date),
                },
            )

    logger.debug(
        f"Aggregated {len(result)} ingredients for {target_date}",
        extra={"target_date": str(target_date), "ingredients": len(result)},
    )

    return result


def assigned_ingredient_ids(target_date: date | str) -> set[int]:
    """
    Ingredient ids referenced by any purchase order line for a target date.

    Order status does not matter, nor does the ordered quantity.
    """
    target_date = coerce_date(target_date)

    return set(
        PurchaseOrderItem.objects.filter(order__target_date=target_date)
        .order_by()
        .values_list("ingredient_id", flat=True)
        .distinct()
    )


def pending_ingredients(
    aggregated: Iterable[AggregatedIngredient],
    assigned_ids: set[int],
) -> list[AggregatedIngredient]:
    """Aggregated records not yet assigned to any purchase order."""
    return [item for item in aggregated if item.ingredient_id not in assigned_ids]
