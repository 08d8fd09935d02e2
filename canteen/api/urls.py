"""
Canteen API URLs.

Include this in your project's urlpatterns:

    path('api/canteen/', include('canteen.api.urls')),
"""

from rest_framework.routers import DefaultRouter

from .views import (
    IngredientViewSet,
    MenuViewSet,
    ProcurementViewSet,
    PurchaseOrderViewSet,
    SupplierViewSet,
)

router = DefaultRouter()
router.register("ingredients", IngredientViewSet)
router.register("suppliers", SupplierViewSet)
router.register("menus", MenuViewSet)
router.register("purchase-orders", PurchaseOrderViewSet)
router.register("procurement", ProcurementViewSet, basename="procurement")

urlpatterns = router.urls
