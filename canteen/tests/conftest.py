"""
Shared fixtures for Canteen tests.
"""

import pytest

from canteen.models import Supplier
from canteen.services import save_menu


@pytest.fixture
def make_menu(db):
    """
    Factory: save a menu from (dish, [(ingredient, quantity, unit), ...]) pairs.

        make_menu("2025-01-01", "canteen-1", "lunch",
                  [("土豆牛腩", [("土豆", 10, "kg")])], status="submitted")
    """

    def _make(date, canteen, meal, dishes, status="draft", **extra):
        return save_menu(
            {
                "date": date,
                "canteen": canteen,
                "meal": meal,
                "status": status,
                "dishes": [
                    {
                        "name": dish,
                        "ingredients": [
                            {"name": name, "quantity": quantity, "unit": unit}
                            for name, quantity, unit in lines
                        ],
                    }
                    for dish, lines in dishes
                ],
                **extra,
            }
        )

    return _make


@pytest.fixture
def supplier(db):
    return Supplier.objects.create(name="绿源蔬菜批发", contact="周经理", phone="13800000001")


@pytest.fixture
def potato_day(make_menu):
    """Two submitted menus on 2025-01-01 sharing 土豆 (10 kg + 8 kg)."""
    lunch = make_menu(
        "2025-01-01",
        "canteen-1",
        "lunch",
        [("土豆牛腩", [("土豆", 10, "kg"), ("牛腩", 5, "kg")])],
        status="submitted",
    )
    dinner = make_menu(
        "2025-01-01",
        "canteen-2",
        "dinner",
        [("地三鲜", [("土豆", 8, "kg"), ("茄子", 3, "kg")])],
        status="submitted",
    )
    return lunch, dinner
