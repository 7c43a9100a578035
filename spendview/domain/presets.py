"""Date preset resolution and filter preset (de)serialization.

Pure functions: "now" is always passed in by the caller.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any

from spendview import dates
from spendview.domain.models import Category, DatePreset, DateRange, FilterPreset, FilterSpec, Money


def resolve_date_preset(preset: DatePreset | str | None, now: datetime) -> DateRange | None:
    """Map a symbolic preset to a concrete inclusive range.

    Args:
        preset: Preset (or its string value).
        now: Current instant.

    Returns:
        DateRange, or None for "custom", None and unrecognized values.
    """
    if preset is None:
        return None
    try:
        preset = DatePreset(preset)
    except ValueError:
        return None

    if preset == DatePreset.TODAY:
        return DateRange(dates.start_of_day(now), dates.end_of_day(now))

    if preset == DatePreset.YESTERDAY:
        yesterday = now - timedelta(days=1)
        return DateRange(dates.start_of_day(yesterday), dates.end_of_day(yesterday))

    if preset == DatePreset.THIS_WEEK:
        return DateRange(dates.start_of_week(now), dates.end_of_week(now))

    if preset == DatePreset.LAST_WEEK:
        last_week = now - timedelta(days=7)
        return DateRange(dates.start_of_week(last_week), dates.end_of_week(last_week))

    if preset == DatePreset.THIS_MONTH:
        return DateRange(dates.start_of_month(now), dates.end_of_month(now))

    if preset == DatePreset.LAST_MONTH:
        last_month = dates.subtract_months(now, 1)
        return DateRange(dates.start_of_month(last_month), dates.end_of_month(last_month))

    if preset == DatePreset.LAST_3_MONTHS:
        return DateRange(dates.start_of_month(dates.subtract_months(now, 2)), dates.end_of_month(now))

    if preset == DatePreset.LAST_6_MONTHS:
        return DateRange(dates.start_of_month(dates.subtract_months(now, 5)), dates.end_of_month(now))

    if preset == DatePreset.THIS_YEAR:
        return DateRange(dates.start_of_year(now), dates.end_of_year(now))

    if preset == DatePreset.LAST_YEAR:
        last_year = dates.subtract_years(now, 1)
        return DateRange(dates.start_of_year(last_year), dates.end_of_year(last_year))

    return None


def filter_spec_to_dict(spec: FilterSpec) -> dict[str, Any]:
    """Convert a FilterSpec to a JSON-compatible dict, omitting unset fields."""
    data: dict[str, Any] = {}
    if spec.categories:
        # Keep enumeration order so stored presets are stable
        data["categories"] = [c.value for c in Category if c in spec.categories]
    if spec.start_date:
        data["startDate"] = spec.start_date.isoformat()
    if spec.end_date:
        data["endDate"] = spec.end_date.isoformat()
    if spec.date_preset:
        data["datePreset"] = spec.date_preset.value
    if spec.search_query:
        data["searchQuery"] = spec.search_query
    if spec.min_amount is not None:
        data["minAmount"] = str(spec.min_amount)
    if spec.max_amount is not None:
        data["maxAmount"] = str(spec.max_amount)
    return data


def filter_spec_from_dict(data: dict[str, Any]) -> FilterSpec:
    """Build a FilterSpec from a dict produced by filter_spec_to_dict.

    Raises:
        ValueError: If a value has the wrong shape (unknown category, bad date).
    """
    if not isinstance(data, dict):
        raise ValueError("Filter preset must be an object")

    categories = None
    if data.get("categories"):
        try:
            categories = frozenset(Category(name) for name in data["categories"])
        except TypeError as e:
            raise ValueError(f"Invalid categories: {data['categories']!r}") from e

    def _date(key: str) -> date | None:
        value = data.get(key)
        if not value:
            return None
        try:
            return date.fromisoformat(value)
        except TypeError as e:
            raise ValueError(f"Invalid date for {key}: {value!r}") from e

    def _money(key: str) -> Money | None:
        value = data.get(key)
        if value is None:
            return None
        try:
            return Money(Decimal(str(value)))
        except ArithmeticError as e:
            raise ValueError(f"Invalid amount for {key}: {value!r}") from e

    preset = data.get("datePreset")

    return FilterSpec(
        categories=categories,
        start_date=_date("startDate"),
        end_date=_date("endDate"),
        date_preset=DatePreset(preset) if preset else None,
        search_query=data.get("searchQuery") or None,
        min_amount=_money("minAmount"),
        max_amount=_money("maxAmount"),
    )


def create_filter_preset(name: str, filters: FilterSpec, preset_id: str, now: datetime) -> FilterPreset:
    """Create a named filter preset.

    Raises:
        ValueError: If name is blank.
    """
    name = name.strip()
    if not name:
        raise ValueError("Preset name cannot be empty")
    return FilterPreset(id=preset_id, name=name, filters=filters, created_at=now)
