"""
Canteen Result Types.

Structured results for the public Kitchen operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from canteen.services.aggregation import AggregatedIngredient

T = TypeVar("T")


@dataclass
class ActionResult(Generic[T]):
    """
    Result of a public Kitchen operation.

    success=True: data holds the return value
    success=False: error holds the message, code the error code
    """

    success: bool
    data: T | None = None
    error: str | None = None
    code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: T = None) -> ActionResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: str, **details: Any) -> ActionResult[T]:
        return cls(success=False, error=error, code=code, details=details)

    def as_dict(self) -> dict:
        """Failure payload for API responses."""
        return {"error": self.error, "code": self.code, **self.details}


@dataclass
class ProcurementData:
    """Everything the procurement screen needs for one target date."""

    aggregated_ingredients: list[AggregatedIngredient]
    purchase_orders: list
    assigned_ids: set[int]
    pending: list[AggregatedIngredient]
