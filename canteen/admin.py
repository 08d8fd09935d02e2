"""
Canteen Admin: Django admin for ingredients, menus, suppliers and purchase orders.
"""

from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from canteen.models import (
    Dish,
    DishIngredient,
    Ingredient,
    Menu,
    PurchaseOrder,
    PurchaseOrderItem,
    Supplier,
)


# ── Ingredient ──


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    list_display = ("name", "unit", "created_at")
    search_fields = ("name",)


# ── Menu ──


class DishInline(admin.TabularInline):
    """Inline for dishes on a menu."""

    model = Dish
    extra = 1
    fields = ("name", "planned_servings", "chef_name", "sort_order")
    show_change_link = True


@admin.register(Menu)
class MenuAdmin(SimpleHistoryAdmin):
    """Admin for menus."""

    list_display = ("date", "canteen", "meal", "status", "submitted_at")
    list_filter = ("status", "meal", "canteen")
    date_hierarchy = "date"
    inlines = [DishInline]
    readonly_fields = ("uuid", "created_at", "updated_at", "submitted_at")


class DishIngredientInline(admin.TabularInline):
    """Inline for ingredient usage lines."""

    model = DishIngredient
    extra = 1
    fields = ("ingredient", "quantity", "unit", "remark")
    autocomplete_fields = ("ingredient",)


@admin.register(Dish)
class DishAdmin(admin.ModelAdmin):
    list_display = ("name", "menu", "planned_servings", "chef_name")
    list_filter = ("menu__date", "menu__status")
    search_fields = ("name", "chef_name")
    raw_id_fields = ("menu",)
    inlines = [DishIngredientInline]


# ── Procurement ──


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("name", "contact", "phone", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "contact")


class PurchaseOrderItemInline(admin.TabularInline):
    model = PurchaseOrderItem
    extra = 1
    fields = ("ingredient", "quantity", "unit", "remark")
    autocomplete_fields = ("ingredient",)


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(SimpleHistoryAdmin):
    """Admin for purchase orders."""

    list_display = ("code", "target_date", "supplier", "status", "date")
    list_filter = ("status", "target_date")
    search_fields = ("code", "supplier__name")
    inlines = [PurchaseOrderItemInline]
    readonly_fields = ("uuid", "code", "created_at", "updated_at", "confirmed_at")
