"""
Tests for Canteen API ViewSets (canteen.api.views).

Verifies DRF endpoints for ingredients, suppliers, menus, purchase orders
and procurement queries, and the mapping of failures to HTTP status codes.
"""

import pytest

pytestmark = pytest.mark.urls("canteen.tests.test_api_urls")
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from rest_framework.test import APIClient

from canteen.models import Ingredient, Menu, MenuStatus, PurchaseOrder, Supplier

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def api_client(db):
    user = User.objects.create_user(username="api_user", password="test123")
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def menu_payload():
    return {
        "date": "2025-01-01",
        "canteen": "canteen-1",
        "meal": "lunch",
        "dishes": [
            {
                "name": "土豆牛腩",
                "planned_servings": 50,
                "chef_name": "张师傅",
                "ingredients": [
                    {"name": "土豆", "quantity": "10", "unit": "kg"},
                    {"name": "牛腩", "quantity": "5", "unit": "kg"},
                ],
            }
        ],
    }


# ═══════════════════════════════════════════════════════════════════
# Authentication
# ═══════════════════════════════════════════════════════════════════


class TestAuthentication:
    def test_anonymous_rejected(self, db):
        response = APIClient().get("/api/canteen/procurement/?date=2025-01-01")

        assert response.status_code == 403


# ═══════════════════════════════════════════════════════════════════
# Ingredients / Suppliers
# ═══════════════════════════════════════════════════════════════════


class TestIngredientAPI:
    def test_list_with_search(self, api_client):
        Ingredient.objects.create(name="土豆", unit="kg")
        Ingredient.objects.create(name="鸡蛋", unit="个")

        response = api_client.get("/api/canteen/ingredients/?q=土")

        assert response.status_code == 200
        assert [i["name"] for i in response.data] == ["土豆"]

    def test_create(self, api_client):
        response = api_client.post(
            "/api/canteen/ingredients/", {"name": "豆腐", "unit": "块"}, format="json"
        )

        assert response.status_code == 201
        assert Ingredient.objects.get(name="豆腐").unit == "块"

    def test_duplicate_name_rejected(self, api_client):
        Ingredient.objects.create(name="豆腐", unit="块")

        response = api_client.post(
            "/api/canteen/ingredients/", {"name": "豆腐"}, format="json"
        )

        assert response.status_code == 400


class TestSupplierAPI:
    def test_create_and_update(self, api_client):
        created = api_client.post(
            "/api/canteen/suppliers/", {"name": "鲜达肉禽", "phone": "123"}, format="json"
        )
        pk = created.data["id"]

        updated = api_client.patch(
            f"/api/canteen/suppliers/{pk}/", {"is_active": False}, format="json"
        )

        assert created.status_code == 201
        assert updated.status_code == 200
        assert Supplier.objects.get(pk=pk).is_active is False


# ═══════════════════════════════════════════════════════════════════
# MenuViewSet
# ═══════════════════════════════════════════════════════════════════


class TestMenuAPI:
    def test_create(self, api_client, menu_payload):
        response = api_client.post("/api/canteen/menus/", menu_payload, format="json")

        assert response.status_code == 201
        assert response.data["status"] == "draft"
        assert response.data["canteen_name"] == "第一食堂"
        dish = response.data["dishes"][0]
        assert dish["name"] == "土豆牛腩"
        assert [(l["ingredient_name"], l["quantity"]) for l in dish["ingredients"]] == [
            ("土豆", "10.000"),
            ("牛腩", "5.000"),
        ]

    def test_create_unknown_canteen(self, api_client, menu_payload):
        menu_payload["canteen"] = "canteen-9"

        response = api_client.post("/api/canteen/menus/", menu_payload, format="json")

        assert response.status_code == 400
        assert response.data["code"] == "UNKNOWN_CANTEEN"

    def test_create_negative_quantity(self, api_client, menu_payload):
        menu_payload["dishes"][0]["ingredients"][0]["quantity"] = "-1"

        response = api_client.post("/api/canteen/menus/", menu_payload, format="json")

        assert response.status_code == 400
        assert Menu.objects.count() == 0

    def test_resave_submitted_is_locked(self, api_client, menu_payload):
        api_client.post(
            "/api/canteen/menus/", {**menu_payload, "status": "submitted"}, format="json"
        )

        response = api_client.post("/api/canteen/menus/", menu_payload, format="json")

        assert response.status_code == 400
        assert response.data["code"] == "MENU_LOCKED"

    def test_list_by_date(self, api_client, make_menu):
        make_menu("2025-01-01", "canteen-1", "lunch", [])
        make_menu("2025-01-02", "canteen-1", "lunch", [])

        response = api_client.get("/api/canteen/menus/?date=2025-01-01")

        assert response.status_code == 200
        assert [m["date"] for m in response.data] == ["2025-01-01"]

    def test_list_by_range(self, api_client, make_menu):
        make_menu("2025-01-01", "canteen-1", "lunch", [])
        make_menu("2025-01-02", "canteen-1", "lunch", [])

        response = api_client.get("/api/canteen/menus/?start=2025-01-01&end=2025-01-07")

        assert [m["date"] for m in response.data] == ["2025-01-01", "2025-01-02"]

    def test_list_without_date(self, api_client):
        response = api_client.get("/api/canteen/menus/")

        assert response.status_code == 400
        assert response.data["code"] == "INVALID_DATE"

    def test_submit(self, api_client, make_menu):
        menu = make_menu("2025-01-01", "canteen-1", "lunch", [])

        response = api_client.post(f"/api/canteen/menus/{menu.uuid}/submit/")

        assert response.status_code == 200
        assert response.data["status"] == "submitted"
        menu.refresh_from_db()
        assert menu.status == MenuStatus.SUBMITTED

    def test_submit_twice(self, api_client, make_menu):
        menu = make_menu("2025-01-01", "canteen-1", "lunch", [], status="submitted")

        response = api_client.post(f"/api/canteen/menus/{menu.uuid}/submit/")

        assert response.status_code == 400
        assert response.data["code"] == "VALIDATION_ERROR"

    def test_destroy(self, api_client, make_menu):
        menu = make_menu("2025-01-01", "canteen-1", "lunch", [])

        response = api_client.delete(f"/api/canteen/menus/{menu.uuid}/")

        assert response.status_code == 204
        assert Menu.objects.count() == 0

    def test_stats(self, api_client, make_menu):
        make_menu("2025-01-01", "canteen-1", "lunch", [], status="submitted")
        make_menu("2025-01-01", "canteen-1", "dinner", [])

        response = api_client.get("/api/canteen/menus/stats/?start=2025-01-01&end=2025-01-31")

        assert response.status_code == 200
        assert response.data == {"2025-01-01": {"total": 2, "draft": 1, "submitted": 1}}


# ═══════════════════════════════════════════════════════════════════
# PurchaseOrderViewSet
# ═══════════════════════════════════════════════════════════════════


class TestPurchaseOrderAPI:
    def test_create(self, api_client, potato_day, supplier):
        potato = Ingredient.objects.get(name="土豆")

        response = api_client.post(
            "/api/canteen/purchase-orders/",
            {
                "target_date": "2025-01-01",
                "supplier": supplier.pk,
                "items": [{"ingredient_id": potato.pk, "quantity": "18"}],
            },
            format="json",
        )

        assert response.status_code == 201
        assert response.data["status"] == "draft"
        assert response.data["supplier_name"] == supplier.name
        assert response.data["created_by"] == "user:api_user"
        assert response.data["code"].startswith("PO-")
        item = response.data["items"][0]
        assert (item["ingredient_name"], item["quantity"], item["unit"]) == (
            "土豆",
            "18.000",
            "kg",
        )

    def test_create_without_items(self, api_client, supplier):
        response = api_client.post(
            "/api/canteen/purchase-orders/",
            {"target_date": "2025-01-01", "supplier": supplier.pk, "items": []},
            format="json",
        )

        assert response.status_code == 400
        assert PurchaseOrder.objects.count() == 0

    def test_create_unknown_supplier(self, api_client, potato_day):
        potato = Ingredient.objects.get(name="土豆")

        response = api_client.post(
            "/api/canteen/purchase-orders/",
            {
                "target_date": "2025-01-01",
                "supplier": 9999,
                "items": [{"ingredient_id": potato.pk, "quantity": "1"}],
            },
            format="json",
        )

        assert response.status_code == 404
        assert response.data["code"] == "SUPPLIER_NOT_FOUND"

    def test_create_unknown_ingredient(self, api_client, supplier):
        response = api_client.post(
            "/api/canteen/purchase-orders/",
            {
                "target_date": "2025-01-01",
                "supplier": supplier.pk,
                "items": [{"ingredient_id": 9999, "quantity": "1"}],
            },
            format="json",
        )

        assert response.status_code == 404
        assert response.data["code"] == "INGREDIENT_NOT_FOUND"

    def test_list_by_target_date(self, api_client, potato_day, supplier):
        potato = Ingredient.objects.get(name="土豆")
        from canteen.services import create_purchase_order

        create_purchase_order("2025-01-01", supplier, [{"ingredient_id": potato.pk, "quantity": 1}])
        create_purchase_order("2025-01-02", supplier, [{"ingredient_id": potato.pk, "quantity": 1}])

        response = api_client.get("/api/canteen/purchase-orders/?targetDate=2025-01-01")

        assert response.status_code == 200
        assert [o["target_date"] for o in response.data] == ["2025-01-01"]

    def test_confirm_then_delete_rejected(self, api_client, potato_day, supplier):
        from canteen.services import create_purchase_order

        potato = Ingredient.objects.get(name="土豆")
        order = create_purchase_order(
            "2025-01-01", supplier, [{"ingredient_id": potato.pk, "quantity": 1}]
        )

        confirmed = api_client.post(f"/api/canteen/purchase-orders/{order.uuid}/confirm/")
        deleted = api_client.delete(f"/api/canteen/purchase-orders/{order.uuid}/")

        assert confirmed.status_code == 200
        assert confirmed.data["status"] == "confirmed"
        assert deleted.status_code == 400
        assert deleted.data["code"] == "INVALID_STATUS"

    def test_delete_draft_releases_assignment(self, api_client, potato_day, supplier):
        from canteen.services import assigned_ingredient_ids, create_purchase_order

        potato = Ingredient.objects.get(name="土豆")
        order = create_purchase_order(
            "2025-01-01", supplier, [{"ingredient_id": potato.pk, "quantity": 1}]
        )

        response = api_client.delete(f"/api/canteen/purchase-orders/{order.uuid}/")

        assert response.status_code == 204
        assert assigned_ingredient_ids("2025-01-01") == set()


# ═══════════════════════════════════════════════════════════════════
# ProcurementViewSet
# ═══════════════════════════════════════════════════════════════════


class TestProcurementAPI:
    def test_aggregate(self, api_client, potato_day):
        response = api_client.get("/api/canteen/procurement/aggregate/?date=2025-01-01")

        assert response.status_code == 200
        potato = response.data[0]
        assert potato["ingredient_name"] == "土豆"
        assert potato["total_quantity"] == "18.000"
        assert potato["unit"] == "kg"
        assert [s["dish_name"] for s in potato["sources"]] == ["土豆牛腩", "地三鲜"]
        assert potato["has_mixed_units"] is False

    def test_aggregate_missing_date(self, api_client):
        response = api_client.get("/api/canteen/procurement/aggregate/")

        assert response.status_code == 400
        assert response.data["code"] == "INVALID_DATE"

    def test_aggregate_store_error(self, api_client):
        with patch(
            "canteen.services.aggregation.submitted_menus",
            side_effect=DatabaseError("database is locked"),
        ):
            response = api_client.get("/api/canteen/procurement/aggregate/?date=2025-01-01")

        assert response.status_code == 500
        assert response.data["code"] == "STORE_ERROR"

    def test_assigned(self, api_client, potato_day, supplier):
        from canteen.services import create_purchase_order

        potato = Ingredient.objects.get(name="土豆")
        beef = Ingredient.objects.get(name="牛腩")
        create_purchase_order(
            "2025-01-01",
            supplier,
            [
                {"ingredient_id": beef.pk, "quantity": 5},
                {"ingredient_id": potato.pk, "quantity": 18},
            ],
        )

        response = api_client.get("/api/canteen/procurement/assigned/?targetDate=2025-01-01")

        assert response.status_code == 200
        assert response.data == sorted([potato.pk, beef.pk])

    def test_assigned_missing_date(self, api_client):
        response = api_client.get("/api/canteen/procurement/assigned/")

        assert response.status_code == 400

    def test_list_and_pending(self, api_client, potato_day, supplier):
        from canteen.services import create_purchase_order

        potato = Ingredient.objects.get(name="土豆")
        create_purchase_order(
            "2025-01-01", supplier, [{"ingredient_id": potato.pk, "quantity": 18}]
        )

        overview = api_client.get("/api/canteen/procurement/?date=2025-01-01")
        pending = api_client.get("/api/canteen/procurement/pending/?date=2025-01-01")

        assert overview.status_code == 200
        assert len(overview.data["aggregated_ingredients"]) == 3
        assert overview.data["assigned_ids"] == [potato.pk]
        assert len(overview.data["purchase_orders"]) == 1
        assert [i["ingredient_name"] for i in overview.data["pending"]] == ["牛腩", "茄子"]
        assert [i["ingredient_name"] for i in pending.data] == ["牛腩", "茄子"]
