"""
Canteen Analytics.

Calendar statistics and procurement coverage.
Uses aggregate()/annotate() SQL queries wherever possible.
"""

from datetime import date

from django.db.models import Count, Q

from canteen.exceptions import CanteenError
from canteen.models import Menu, MenuStatus
from canteen.services.aggregation import (
    aggregate_ingredients,
    assigned_ingredient_ids,
    pending_ingredients,
)
from canteen.services.inputs import coerce_date


class MenuAnalytics:
    """Analytics for menus and procurement."""

    @classmethod
    def stats_by_date(cls, start: date, end: date) -> dict[date, dict[str, int]]:
        """
        Count menus per date by status (for calendar views).

        Returns:
            {
                date(2025, 1, 1): {"total": 3, "draft": 1, "submitted": 2},
                ...
            }
        """
        start = coerce_date(start, field="start")
        end = coerce_date(end, field="end")
        if start > end:
            raise CanteenError("INVALID_RANGE", start=str(start), end=str(end))

        rows = (
            Menu.objects.filter(date__gte=start, date__lte=end)
            .order_by()
            .values("date")
            .annotate(
                total=Count("id"),
                draft=Count("id", filter=Q(status=MenuStatus.DRAFT)),
                submitted=Count("id", filter=Q(status=MenuStatus.SUBMITTED)),
            )
            .order_by("date")
        )

        return {
            row["date"]: {
                "total": row["total"],
                "draft": row["draft"],
                "submitted": row["submitted"],
            }
            for row in rows
        }

    @classmethod
    def procurement_coverage(cls, target_date: date) -> dict[str, int]:
        """
        How much of a day's demand is already covered by purchase orders.

        Returns:
            {"aggregated": 12, "assigned": 9, "pending": 3}
        """
        aggregated = aggregate_ingredients(target_date)
        assigned = assigned_ingredient_ids(target_date)
        pending = pending_ingredients(aggregated, assigned)

        return {
            "aggregated": len(aggregated),
            "assigned": len(aggregated) - len(pending),
            "pending": len(pending),
        }
