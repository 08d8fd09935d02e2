"""
Canteen Settings.

Supports two formats (dict takes priority):

    # Option 1: Dict
    CANTEEN = {
        "CANTEENS": {"north": "北区食堂"},
        "ORDER_CODE_PREFIX": "CG",
    }

    # Option 2: Flat
    CANTEEN_ORDER_CODE_PREFIX = "CG"

All settings have sensible defaults, zero configuration required.
"""

from django.conf import settings


# ── Defaults ──

DEFAULTS = {
    "CANTEENS": {
        "canteen-1": "第一食堂",
        "canteen-2": "第二食堂",
        "canteen-3": "教工食堂",
    },
    "UNITS": ["kg", "g", "L", "ml", "个", "包", "箱"],
    "ORDER_CODE_PREFIX": "PO",
}


# ── Accessors ──

_sentinel = object()


def get_setting(name, default=_sentinel):
    """
    Get a canteen setting.

    Looks up in order:
    1. CANTEEN dict (e.g. CANTEEN = {"CANTEENS": {...}})
    2. Flat setting (e.g. CANTEEN_CANTEENS = {...})
    3. DEFAULTS
    """
    canteen_dict = getattr(settings, "CANTEEN", {})
    if name in canteen_dict:
        return canteen_dict[name]

    flat_value = getattr(settings, f"CANTEEN_{name}", _sentinel)
    if flat_value is not _sentinel:
        return flat_value

    if default is not _sentinel:
        return default

    return DEFAULTS.get(name)


def get_canteens() -> dict[str, str]:
    """Return configured canteens as {id: display name}."""
    return dict(get_setting("CANTEENS"))


def get_canteen_name(canteen_id: str) -> str:
    """Display name for a canteen id (falls back to the id)."""
    return get_canteens().get(canteen_id, canteen_id)
