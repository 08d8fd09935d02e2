from decimal import Decimal

from django import template

from canteen.lunar import lunar_date_info

register = template.Library()


@register.filter
def qty(value):
    """Format a quantity without trailing zeros (18.000 → 18, 0.500 → 0.5)."""
    if value is None:
        return "0"
    try:
        d = Decimal(str(value))
    except ArithmeticError:
        return str(value)
    if d == d.to_integral_value():
        return str(d.quantize(Decimal("1")))
    return str(d.normalize())


@register.filter
def lunar(value):
    """Lunar calendar label of a date (节日, 节气 or 农历日)."""
    if not value:
        return ""
    return lunar_date_info(value).display_text
