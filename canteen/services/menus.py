"""
Menu persistence -- save (upsert), submit, delete, queries.

A menu is identified by (date, canteen, meal). Saving replaces its
dishes wholesale; ingredients are resolved by name and created on
first use. Submitted menus are locked.

Usage:
    from canteen.services import save_menu

    menu = save_menu({
        "date": "2025-01-01",
        "canteen": "canteen-1",
        "meal": "lunch",
        "status": "draft",
        "dishes": [
            {
                "name": "西红柿炒蛋",
                "planned_servings": 50,
                "chef_name": "Chef Wang",
                "ingredients": [
                    {"name": "西红柿", "quantity": 2, "unit": "个"},
                    {"name": "鸡蛋", "quantity": 3, "unit": "个"},
                ],
            },
        ],
    })
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Mapping

from django.db import transaction

from canteen.conf import get_canteens
from canteen.exceptions import CanteenError
from canteen.models import Dish, DishIngredient, Ingredient, MealSlot, Menu, MenuStatus
from canteen.services.inputs import coerce_date, coerce_quantity

logger = logging.getLogger(__name__)


def _check_slot(canteen: str, meal: str) -> None:
    if canteen not in get_canteens():
        raise CanteenError("UNKNOWN_CANTEEN", canteen=canteen)
    if meal not in MealSlot.values:
        raise CanteenError("UNKNOWN_MEAL", meal=meal)


def _clean_dishes(dishes) -> list[dict]:
    """Validate the dish payload before anything is written."""
    cleaned = []
    for index, dish in enumerate(dishes or []):
        name = (dish.get("name") or "").strip()
        if not name:
            raise CanteenError("INVALID_DISH", position=index)

        lines = []
        for line in dish.get("ingredients") or []:
            ingredient_name = (
                line.get("name") or line.get("ingredient_name") or ""
            ).strip()
            if not ingredient_name:
                raise CanteenError("INVALID_INGREDIENT", dish=name)
            lines.append(
                {
                    "name": ingredient_name,
                    "quantity": coerce_quantity(line.get("quantity")),
                    "unit": (line.get("unit") or "").strip(),
                    "remark": line.get("remark") or "",
                }
            )

        servings = dish.get("planned_servings")
        if servings not in (None, ""):
            try:
                servings = int(servings)
            except (TypeError, ValueError):
                raise CanteenError("INVALID_DISH", dish=name, planned_servings=servings)
            if servings < 0:
                raise CanteenError("INVALID_DISH", dish=name, planned_servings=servings)
        else:
            servings = None

        cleaned.append(
            {
                "name": name,
                "planned_servings": servings,
                "chef_name": dish.get("chef_name") or "",
                "remarks": dish.get("remarks") or "",
                "lines": lines,
            }
        )
    return cleaned


def _resolve_ingredient(name: str, unit: str, cache: dict) -> Ingredient:
    if name not in cache:
        cache[name], created = Ingredient.objects.get_or_create(
            name=name, defaults={"unit": unit}
        )
        if created:
            logger.info(f"Created ingredient {name} ({unit})")
    return cache[name]


def save_menu(data: Mapping, user=None) -> Menu:
    """
    Create or update the menu of (date, canteen, meal).

    Args:
        data: date, canteen, meal, optional status/notes and the dishes
            with their ingredient lines (by ingredient name).
        user: User who saved the menu (optional)

    Returns:
        The saved Menu

    Raises:
        CanteenError: on invalid input, or MENU_LOCKED when the menu
            was already submitted.
    """
    menu_date = coerce_date(data.get("date"))
    canteen = data.get("canteen") or ""
    meal = data.get("meal") or ""
    _check_slot(canteen, meal)

    status = data.get("status") or MenuStatus.DRAFT
    if status not in MenuStatus.values:
        raise CanteenError("INVALID_STATUS", status=status)

    dishes = _clean_dishes(data.get("dishes"))

    with transaction.atomic():
        menu, created = Menu.objects.select_for_update().get_or_create(
            date=menu_date,
            canteen=canteen,
            meal=meal,
            defaults={"notes": data.get("notes") or ""},
        )

        if menu.is_submitted:
            raise CanteenError(
                "MENU_LOCKED", date=str(menu_date), canteen=canteen, meal=meal
            )

        if not created and "notes" in data:
            menu.notes = data.get("notes") or ""
            menu.save(update_fields=["notes", "updated_at"])

        menu.dishes.all().delete()

        ingredient_cache: dict[str, Ingredient] = {}
        for position, dish_data in enumerate(dishes):
            dish = Dish.objects.create(
                menu=menu,
                name=dish_data["name"],
                planned_servings=dish_data["planned_servings"],
                chef_name=dish_data["chef_name"],
                remarks=dish_data["remarks"],
                sort_order=position,
            )
            DishIngredient.objects.bulk_create(
                [
                    DishIngredient(
                        dish=dish,
                        ingredient=_resolve_ingredient(
                            line["name"], line["unit"], ingredient_cache
                        ),
                        quantity=line["quantity"],
                        unit=line["unit"],
                        remark=line["remark"],
                    )
                    for line in dish_data["lines"]
                ]
            )

        if status == MenuStatus.SUBMITTED:
            menu.submit(user)

    logger.info(
        f"Saved menu {menu} with {len(dishes)} dishes",
        extra={
            "menu_date": str(menu_date),
            "canteen": canteen,
            "meal": meal,
            "status": menu.status,
            "menu_created": created,
        },
    )

    return menu


def _get_menu(menu_date, canteen: str, meal: str) -> Menu:
    menu_date = coerce_date(menu_date)
    try:
        return Menu.objects.get(date=menu_date, canteen=canteen, meal=meal)
    except Menu.DoesNotExist:
        raise CanteenError(
            "MENU_NOT_FOUND", date=str(menu_date), canteen=canteen, meal=meal
        )


def submit_menu(menu_date: date | str, canteen: str, meal: str, user=None) -> Menu:
    """Submit a draft menu. Submission cannot be undone."""
    menu = _get_menu(menu_date, canteen, meal)
    menu.submit(user)
    return menu


def delete_menu(menu_date: date | str, canteen: str, meal: str) -> None:
    """Delete a menu and its dishes."""
    menu = _get_menu(menu_date, canteen, meal)
    menu.delete()

    logger.info(
        f"Deleted menu {menu_date} {canteen} {meal}",
        extra={"menu_date": str(menu_date), "canteen": canteen, "meal": meal},
    )


def _with_lines(queryset):
    return queryset.prefetch_related("dishes__ingredients__ingredient")


def menus_by_date(menu_date: date | str):
    """All menus of a date, oldest first."""
    menu_date = coerce_date(menu_date)
    return _with_lines(Menu.objects.filter(date=menu_date).order_by("created_at", "id"))


def menus_by_range(start: date | str, end: date | str):
    """All menus between two dates (inclusive), by date."""
    start = coerce_date(start, field="start")
    end = coerce_date(end, field="end")
    if start > end:
        raise CanteenError("INVALID_RANGE", start=str(start), end=str(end))

    return _with_lines(
        Menu.objects.filter(date__gte=start, date__lte=end).order_by(
            "date", "created_at", "id"
        )
    )
