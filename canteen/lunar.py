"""
Lunar calendar labels for calendar cells (农历).

Priority of the label: lunar festival > solar festival > solar term
(节气) > month name on the first day of a lunar month > lunar day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from lunar_python import Solar


@dataclass(frozen=True)
class LunarDateInfo:
    lunar_day: str
    lunar_month: str
    term: str | None
    festival: str | None
    display_text: str
    is_holiday: bool


def lunar_date_info(day: date) -> LunarDateInfo:
    """Lunar calendar information of a Gregorian date."""
    solar = Solar.fromYmd(day.year, day.month, day.day)
    lunar = solar.getLunar()

    lunar_day = lunar.getDayInChinese()
    lunar_month = f"{lunar.getMonthInChinese()}月"
    term = lunar.getJieQi() or None

    festival = None
    lunar_festivals = lunar.getFestivals()
    solar_festivals = solar.getFestivals()
    if lunar_festivals:
        festival = lunar_festivals[0]
    elif solar_festivals:
        festival = solar_festivals[0]

    if festival:
        display_text = festival
    elif term:
        display_text = term
    elif lunar.getDay() == 1:
        display_text = lunar_month
    else:
        display_text = lunar_day

    return LunarDateInfo(
        lunar_day=lunar_day,
        lunar_month=lunar_month,
        term=term,
        festival=festival,
        display_text=display_text,
        is_holiday=festival is not None,
    )
