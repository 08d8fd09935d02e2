"""
Canteen Services.

Business logic that doesn't belong in models:
- aggregation: ingredient demand of submitted menus, assigned ids, pending pool
- procurement: purchase order creation, listing, confirmation
- menus: save (upsert), submit, delete, queries
"""

from canteen.services.aggregation import (
    AggregatedIngredient,
    IngredientSource,
    aggregate_ingredients,
    assigned_ingredient_ids,
    pending_ingredients,
)
from canteen.services.menus import (
    delete_menu,
    menus_by_date,
    menus_by_range,
    save_menu,
    submit_menu,
)
from canteen.services.procurement import (
    confirm_purchase_order,
    create_purchase_order,
    purchase_orders_for_date,
)

__all__ = [
    "AggregatedIngredient",
    "IngredientSource",
    "aggregate_ingredients",
    "assigned_ingredient_ids",
    "pending_ingredients",
    "save_menu",
    "submit_menu",
    "delete_menu",
    "menus_by_date",
    "menus_by_range",
    "create_purchase_order",
    "purchase_orders_for_date",
    "confirm_purchase_order",
]
