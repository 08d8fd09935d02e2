"""
Canteen Models.

Core models for menu planning and procurement:
- Ingredient: 原料, looked up by name
- Menu: dishes for one (date, canteen, meal slot)
- Dish / DishIngredient: dish and its ingredient usage lines
- Supplier: 供应商
- PurchaseOrder / PurchaseOrderItem: 采购单 for a target date
- CodeSequence: atomic counter behind PurchaseOrder codes
"""

from canteen.models.ingredient import Ingredient
from canteen.models.menu import Dish, DishIngredient, MealSlot, Menu, MenuStatus
from canteen.models.procurement import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    Supplier,
)
from canteen.models.sequence import CodeSequence

__all__ = [
    "Ingredient",
    "Menu",
    "MenuStatus",
    "MealSlot",
    "Dish",
    "DishIngredient",
    "Supplier",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "PurchaseOrderStatus",
    "CodeSequence",
]
