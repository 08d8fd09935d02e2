"""
Canteen Views.

"今日采购" page: aggregated ingredient demand of a day, which ingredients
are already on a purchase order, and the orders themselves.
"""

from datetime import date

from django.contrib.admin.views.decorators import staff_member_required
from django.shortcuts import render
from django.utils import timezone

from canteen.lunar import lunar_date_info
from canteen.service import Kitchen


@staff_member_required
def daily_procurement_view(request):
    """
    View to display the procurement overview of a day.
    """
    # Get date from query param or use today
    date_str = request.GET.get("date")
    if date_str:
        try:
            target_date = date.fromisoformat(date_str)
        except ValueError:
            target_date = timezone.localdate()
    else:
        target_date = timezone.localdate()

    result = Kitchen.procurement_data(target_date)
    data = result.data if result.success else None

    context = {
        "title": f"采购汇总 {target_date:%Y-%m-%d}",
        "target_date": target_date,
        "lunar": lunar_date_info(target_date),
        "aggregated": data.aggregated_ingredients if data else [],
        "assigned_ids": data.assigned_ids if data else set(),
        "pending_count": len(data.pending) if data else 0,
        "purchase_orders": data.purchase_orders if data else [],
        "error": result.error,
    }

    return render(request, "canteen/daily_procurement.html", context)
