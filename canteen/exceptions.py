"""
Canteen Exceptions.

All domain and input errors are wrapped in CanteenError for consistent handling.
"""

from typing import Any


class CanteenError(Exception):
    """
    Base exception for all Canteen errors.

    Usage:
        raise CanteenError("SUPPLIER_NOT_FOUND", supplier_id=42)

    Attributes:
        code: Error code (INVALID_DATE, MENU_LOCKED, etc.)
        details: Additional context as keyword arguments
    """

    def __init__(self, code: str, **details: Any):
        self.code = code
        self.details = details
        message = f"{code}: {details}" if details else code
        super().__init__(message)

    @property
    def message(self) -> str:
        """Human readable message, used by failure results."""
        return MESSAGES.get(self.code, self.code)

    def as_dict(self) -> dict:
        """Return error as dictionary for API responses."""
        return {"code": self.code, **self.details}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"CanteenError({self.code}: {details_str})"
        return f"CanteenError({self.code})"


MESSAGES = {
    "INVALID_DATE": "目标日期不能为空或格式错误 (YYYY-MM-DD)",
    "INVALID_RANGE": "开始日期不能晚于结束日期",
    "UNKNOWN_CANTEEN": "未知的食堂",
    "UNKNOWN_MEAL": "未知的餐次",
    "INVALID_STATUS": "无效的菜单状态",
    "INVALID_DISH": "菜品名称不能为空",
    "INVALID_INGREDIENT": "原料名称不能为空",
    "INVALID_QUANTITY": "数量必须是非负数",
    "MENU_LOCKED": "菜单已提交，不能再修改",
    "MENU_NOT_FOUND": "菜单不存在",
    "SUPPLIER_NOT_FOUND": "供应商不存在",
    "INGREDIENT_NOT_FOUND": "原料不存在",
    "EMPTY_ORDER": "采购单至少需要一项原料",
}
