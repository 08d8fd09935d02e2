"""
Django Canteen - menu planning and procurement for canteens.

Staff plan daily menus per canteen and meal slot; submitted menus are
aggregated into ingredient demand that drives purchase orders.

Usage:
    from canteen import kitchen, CanteenError

    # Planning
    kitchen.save_menu({
        "date": "2025-01-01",
        "canteen": "canteen-1",
        "meal": "lunch",
        "status": "submitted",
        "dishes": [...],
    })

    # Procurement
    result = kitchen.procurement_data("2025-01-01")
    if result.success:
        for item in result.data.pending:
            print(f"待采购: {item.ingredient_name} {item.total_quantity} {item.unit}")
    else:
        print(result.error)
"""

from canteen.exceptions import CanteenError


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name in ("kitchen", "Kitchen"):
        from canteen.service import Kitchen

        return Kitchen
    if name == "ActionResult":
        from canteen.results import ActionResult

        return ActionResult
    if name == "AggregatedIngredient":
        from canteen.services.aggregation import AggregatedIngredient

        return AggregatedIngredient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["kitchen", "Kitchen", "CanteenError", "ActionResult", "AggregatedIngredient"]
__version__ = "0.1.0"
