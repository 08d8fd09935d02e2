"""
Tests for ingredient aggregation (canteen.services.aggregation).

Verifies that:
- only submitted menus of the target date are summed
- records keep first-seen order and their source dishes
- assigned ids come from any purchase order line of the date
- the pending pool is aggregated minus assigned
"""

import logging
from decimal import Decimal

import pytest

from canteen.exceptions import CanteenError
from canteen.models import Ingredient
from canteen.services import (
    AggregatedIngredient,
    aggregate_ingredients,
    assigned_ingredient_ids,
    create_purchase_order,
    pending_ingredients,
)


def by_name(aggregated):
    return {item.ingredient_name: item for item in aggregated}


# ═══════════════════════════════════════════════════════════════════
# aggregate_ingredients
# ═══════════════════════════════════════════════════════════════════


class TestAggregateIngredients:
    def test_sums_same_ingredient_across_menus(self, potato_day):
        lunch, dinner = potato_day

        aggregated = by_name(aggregate_ingredients("2025-01-01"))

        potato = aggregated["土豆"]
        assert potato.total_quantity == Decimal("18")
        assert potato.unit == "kg"
        assert [(s.dish_name, s.menu_id, s.quantity) for s in potato.sources] == [
            ("土豆牛腩", lunch.pk, Decimal("10")),
            ("地三鲜", dinner.pk, Decimal("8")),
        ]

    def test_first_seen_order(self, potato_day):
        names = [item.ingredient_name for item in aggregate_ingredients("2025-01-01")]

        assert names == ["土豆", "牛腩", "茄子"]

    def test_accepts_date_object(self, potato_day):
        from datetime import date

        assert len(aggregate_ingredients(date(2025, 1, 1))) == 3

    def test_draft_menus_ignored(self, make_menu):
        make_menu("2025-01-01", "canteen-1", "lunch", [("红烧肉", [("五花肉", 5, "kg")])])

        assert aggregate_ingredients("2025-01-01") == []

    def test_other_dates_ignored(self, potato_day, make_menu):
        make_menu(
            "2025-01-02",
            "canteen-1",
            "lunch",
            [("土豆丝", [("土豆", 100, "kg")])],
            status="submitted",
        )

        potato = by_name(aggregate_ingredients("2025-01-01"))["土豆"]
        assert potato.total_quantity == Decimal("18")

    def test_no_menus_returns_empty(self, db):
        assert aggregate_ingredients("2030-06-01") == []

    def test_same_ingredient_twice_in_one_dish(self, make_menu):
        menu = make_menu(
            "2025-01-01",
            "canteen-1",
            "lunch",
            [("双椒", [("辣椒", 2, "个"), ("辣椒", 3, "个")])],
            status="submitted",
        )

        pepper = aggregate_ingredients("2025-01-01")[0]
        assert pepper.total_quantity == Decimal("5")
        assert len(pepper.sources) == 2
        assert {s.menu_id for s in pepper.sources} == {menu.pk}

    def test_zero_quantity_lines_counted(self, make_menu):
        make_menu(
            "2025-01-01",
            "canteen-1",
            "lunch",
            [("清汤", [("葱", 0, "g")])],
            status="submitted",
        )

        (item,) = aggregate_ingredients("2025-01-01")
        assert item.total_quantity == Decimal("0")
        assert len(item.sources) == 1

    def test_fractional_quantities_not_rounded(self, make_menu):
        make_menu(
            "2025-01-01",
            "canteen-1",
            "lunch",
            [("凉拌", [("香油", "0.125", "L")])],
            status="submitted",
        )
        make_menu(
            "2025-01-01",
            "canteen-1",
            "dinner",
            [("拌面", [("香油", "0.25", "L")])],
            status="submitted",
        )

        (item,) = aggregate_ingredients("2025-01-01")
        assert item.total_quantity == Decimal("0.375")

    def test_mixed_units_summed_with_warning(self, make_menu, caplog):
        make_menu(
            "2025-01-01",
            "canteen-1",
            "lunch",
            [("红烧肉", [("五花肉", 2, "kg")])],
            status="submitted",
        )
        make_menu(
            "2025-01-01",
            "canteen-2",
            "lunch",
            [("回锅肉", [("五花肉", 500, "g")])],
            status="submitted",
        )

        with caplog.at_level(logging.WARNING, logger="canteen.services.aggregation"):
            (item,) = aggregate_ingredients("2025-01-01")

        assert item.unit == "kg"
        assert item.total_quantity == Decimal("502")
        assert item.unit_totals == {"kg": Decimal("2"), "g": Decimal("500")}
        assert item.has_mixed_units
        assert "五花肉" in caplog.text

    def test_empty_date_rejected(self, db):
        with pytest.raises(CanteenError) as exc:
            aggregate_ingredients("")
        assert exc.value.code == "INVALID_DATE"

    def test_malformed_date_rejected(self, db):
        with pytest.raises(CanteenError) as exc:
            aggregate_ingredients("2025-13-40")
        assert exc.value.code == "INVALID_DATE"


# ═══════════════════════════════════════════════════════════════════
# assigned_ingredient_ids
# ═══════════════════════════════════════════════════════════════════


class TestAssignedIngredientIds:
    def test_empty_without_orders(self, potato_day):
        assert assigned_ingredient_ids("2025-01-01") == set()

    def test_any_line_assigns_ingredient(self, potato_day, supplier):
        potato = Ingredient.objects.get(name="土豆")
        # Under-ordering still assigns
        create_purchase_order(
            "2025-01-01", supplier, [{"ingredient_id": potato.pk, "quantity": 1}]
        )

        assert assigned_ingredient_ids("2025-01-01") == {potato.pk}

    def test_union_across_orders(self, potato_day, supplier):
        potato = Ingredient.objects.get(name="土豆")
        beef = Ingredient.objects.get(name="牛腩")
        create_purchase_order(
            "2025-01-01", supplier, [{"ingredient_id": potato.pk, "quantity": 18}]
        )
        create_purchase_order(
            "2025-01-01",
            supplier,
            [
                {"ingredient_id": potato.pk, "quantity": 2},
                {"ingredient_id": beef.pk, "quantity": 5},
            ],
        )

        assert assigned_ingredient_ids("2025-01-01") == {potato.pk, beef.pk}

    def test_confirmed_orders_count(self, potato_day, supplier):
        from canteen.services import confirm_purchase_order

        beef = Ingredient.objects.get(name="牛腩")
        order = create_purchase_order(
            "2025-01-01", supplier, [{"ingredient_id": beef.pk, "quantity": 5}]
        )
        confirm_purchase_order(order)

        assert assigned_ingredient_ids("2025-01-01") == {beef.pk}

    def test_scoped_to_target_date(self, potato_day, supplier):
        potato = Ingredient.objects.get(name="土豆")
        create_purchase_order(
            "2025-01-02", supplier, [{"ingredient_id": potato.pk, "quantity": 18}]
        )

        assert assigned_ingredient_ids("2025-01-01") == set()
        assert assigned_ingredient_ids("2025-01-02") == {potato.pk}

    def test_ingredient_not_on_any_menu(self, supplier):
        salt = Ingredient.objects.create(name="盐", unit="kg")
        create_purchase_order(
            "2025-01-01", supplier, [{"ingredient_id": salt.pk, "quantity": 1}]
        )

        assert assigned_ingredient_ids("2025-01-01") == {salt.pk}


# ═══════════════════════════════════════════════════════════════════
# pending_ingredients
# ═══════════════════════════════════════════════════════════════════


class TestPendingIngredients:
    def test_filters_assigned(self):
        a = AggregatedIngredient(1, "土豆", Decimal("18"), "kg")
        b = AggregatedIngredient(2, "牛腩", Decimal("5"), "kg")
        c = AggregatedIngredient(3, "茄子", Decimal("3"), "kg")

        assert pending_ingredients([a, b, c], {2}) == [a, c]

    def test_nothing_assigned_keeps_all(self):
        a = AggregatedIngredient(1, "土豆", Decimal("18"), "kg")

        assert pending_ingredients([a], set()) == [a]

    def test_assigned_ids_outside_aggregate_ignored(self):
        a = AggregatedIngredient(1, "土豆", Decimal("18"), "kg")

        assert pending_ingredients([a], {99}) == [a]

    def test_everything_assigned(self, potato_day, supplier):
        lines = [
            {"ingredient_id": item.ingredient_id, "quantity": item.total_quantity}
            for item in aggregate_ingredients("2025-01-01")
        ]
        create_purchase_order("2025-01-01", supplier, lines)

        assert (
            pending_ingredients(
                aggregate_ingredients("2025-01-01"),
                assigned_ingredient_ids("2025-01-01"),
            )
            == []
        )
