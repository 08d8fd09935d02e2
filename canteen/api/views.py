"""
Canteen API ViewSets.

Writes and procurement queries go through the Kitchen facade, so failures
arrive as ActionResult and are mapped to HTTP status codes here.
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from canteen.models import Ingredient, Menu, PurchaseOrder, PurchaseOrderStatus, Supplier
from canteen.service import Kitchen

from .serializers import (
    AggregatedIngredientSerializer,
    IngredientSerializer,
    MenuSerializer,
    MenuWriteSerializer,
    ProcurementDataSerializer,
    PurchaseOrderCreateSerializer,
    PurchaseOrderSerializer,
    SupplierSerializer,
)

NOT_FOUND_CODES = {"MENU_NOT_FOUND", "SUPPLIER_NOT_FOUND", "INGREDIENT_NOT_FOUND"}


def failure_response(result) -> Response:
    """Map a failed ActionResult to an error Response."""
    if result.code == "STORE_ERROR":
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    elif result.code in NOT_FOUND_CODES:
        http_status = status.HTTP_404_NOT_FOUND
    else:
        http_status = status.HTTP_400_BAD_REQUEST
    return Response(result.as_dict(), status=http_status)


def query_date(request, *names) -> str:
    """First non-empty query parameter among ``names`` ('' if none)."""
    for name in names:
        value = request.query_params.get(name)
        if value:
            return value
    return ""


class IngredientViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for Ingredient.

    list: List ingredients (?q= filters by name)
    create: Create an ingredient
    retrieve: Get an ingredient
    """

    permission_classes = [IsAuthenticated]
    queryset = Ingredient.objects.all()
    serializer_class = IngredientSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        q = self.request.query_params.get("q")
        if q:
            qs = qs.filter(name__icontains=q)
        return qs


class SupplierViewSet(viewsets.ModelViewSet):
    """ViewSet for Supplier (full CRUD)."""

    permission_classes = [IsAuthenticated]
    queryset = Supplier.objects.all()
    serializer_class = SupplierSerializer


class MenuViewSet(
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for Menu.

    list: Menus of ?date= or of ?start=&end=
    create: Create or replace the menu of (date, canteen, meal)
    retrieve: Get a menu by UUID
    destroy: Delete a menu
    submit: Submit a draft menu
    stats: Per-date status counts for ?start=&end=
    """

    permission_classes = [IsAuthenticated]
    queryset = Menu.objects.prefetch_related("dishes__ingredients__ingredient")
    serializer_class = MenuSerializer
    lookup_field = "uuid"

    def list(self, request):
        """
        GET /api/canteen/menus/?date=2025-01-01
        GET /api/canteen/menus/?start=2025-01-01&end=2025-01-07
        """
        if request.query_params.get("start") or request.query_params.get("end"):
            result = Kitchen.menus_by_range(
                query_date(request, "start"), query_date(request, "end")
            )
        else:
            result = Kitchen.menus_by_date(query_date(request, "date"))

        if not result.success:
            return failure_response(result)
        return Response(MenuSerializer(result.data, many=True).data)

    def create(self, request):
        """
        Create or replace a menu.

        POST /api/canteen/menus/
        """
        serializer = MenuWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = Kitchen.save_menu(serializer.validated_data, user=request.user)
        if not result.success:
            return failure_response(result)

        menu = self.get_queryset().get(pk=result.data.pk)
        return Response(MenuSerializer(menu).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, uuid=None):
        menu = self.get_object()
        result = Kitchen.delete_menu(menu.date, menu.canteen, menu.meal)
        if not result.success:
            return failure_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def submit(self, request, uuid=None):
        """
        Submit a draft menu.

        POST /api/canteen/menus/{uuid}/submit/
        """
        menu = self.get_object()
        result = Kitchen.submit_menu(menu.date, menu.canteen, menu.meal, user=request.user)
        if not result.success:
            return failure_response(result)
        return Response(
            {
                "status": result.data.status,
                "date": result.data.date,
                "submitted_at": result.data.submitted_at,
            }
        )

    @action(detail=False, methods=["get"])
    def stats(self, request):
        """
        GET /api/canteen/menus/stats/?start=2025-01-01&end=2025-01-31
        """
        result = Kitchen.menu_stats(query_date(request, "start"), query_date(request, "end"))
        if not result.success:
            return failure_response(result)
        return Response({day.isoformat(): counts for day, counts in result.data.items()})


class PurchaseOrderViewSet(
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for PurchaseOrder.

    list: Orders of ?target_date= (all orders without it)
    create: Create a draft order
    retrieve: Get an order by UUID
    destroy: Delete a draft order
    confirm: Confirm a draft order
    """

    permission_classes = [IsAuthenticated]
    queryset = PurchaseOrder.objects.select_related("supplier").prefetch_related(
        "items__ingredient"
    )
    serializer_class = PurchaseOrderSerializer
    lookup_field = "uuid"

    def list(self, request):
        target_date = query_date(request, "target_date", "targetDate")
        if not target_date:
            return Response(PurchaseOrderSerializer(self.get_queryset(), many=True).data)

        result = Kitchen.purchase_orders(target_date)
        if not result.success:
            return failure_response(result)
        return Response(PurchaseOrderSerializer(result.data, many=True).data)

    def create(self, request):
        """
        POST /api/canteen/purchase-orders/
        {
            "target_date": "2025-01-01",
            "supplier": 1,
            "items": [{"ingredient_id": 3, "quantity": "18", "unit": "kg"}]
        }
        """
        serializer = PurchaseOrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = Kitchen.create_purchase_order(
            data["target_date"],
            data["supplier"],
            data["items"],
            user=request.user,
            notes=data["notes"],
        )
        if not result.success:
            return failure_response(result)

        order = self.get_queryset().get(pk=result.data.pk)
        return Response(PurchaseOrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, uuid=None):
        order = self.get_object()
        if order.status != PurchaseOrderStatus.DRAFT:
            return Response(
                {"error": "只能删除草稿采购单", "code": "INVALID_STATUS"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        order.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def confirm(self, request, uuid=None):
        """
        POST /api/canteen/purchase-orders/{uuid}/confirm/
        """
        order = self.get_object()
        result = Kitchen.confirm_purchase_order(order, user=request.user)
        if not result.success:
            return failure_response(result)
        return Response(
            {
                "status": result.data.status,
                "code": result.data.code,
                "confirmed_at": result.data.confirmed_at,
            }
        )


class ProcurementViewSet(viewsets.ViewSet):
    """
    Procurement queries for a target date.

    list: Aggregated ingredients, orders, assigned ids and pending pool
    aggregate: Aggregated ingredients
    assigned: Assigned ingredient ids
    pending: Pending pool (待采购)
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        """
        GET /api/canteen/procurement/?date=2025-01-01
        """
        result = Kitchen.procurement_data(query_date(request, "date", "targetDate"))
        if not result.success:
            return failure_response(result)
        return Response(ProcurementDataSerializer(result.data).data)

    @action(detail=False, methods=["get"])
    def aggregate(self, request):
        """
        GET /api/canteen/procurement/aggregate/?date=2025-01-01
        """
        result = Kitchen.aggregate(query_date(request, "date"))
        if not result.success:
            return failure_response(result)
        return Response(AggregatedIngredientSerializer(result.data, many=True).data)

    @action(detail=False, methods=["get"])
    def assigned(self, request):
        """
        GET /api/canteen/procurement/assigned/?targetDate=2025-01-01
        """
        result = Kitchen.assigned_ids(query_date(request, "targetDate", "date"))
        if not result.success:
            return failure_response(result)
        return Response(sorted(result.data))

    @action(detail=False, methods=["get"])
    def pending(self, request):
        """
        GET /api/canteen/procurement/pending/?date=2025-01-01
        """
        result = Kitchen.pending(query_date(request, "date"))
        if not result.success:
            return failure_response(result)
        return Response(AggregatedIngredientSerializer(result.data, many=True).data)
