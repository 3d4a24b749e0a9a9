"""
Turns the ways callers describe a time window into concrete UTC boundaries.

Two inputs are supported:
    1) A named period relative to now (weekly, monthly, quarterly). Periods are
       calendar aligned: weeks start on Monday, quarters on Jan/Apr/Jul/Oct 1st,
       and every period runs up to the current instant.
    2) Free-form `from` / `to` strings. Each side is optional and parsed on its
       own; a value we cannot read is treated as absent rather than rejected.

All boundaries are inclusive on both ends and expressed in UTC.
"""
import datetime
from typing import Optional

from dateutil import parser as date_parser
from loguru import logger

from salesdesk import settings
from salesdesk.common.domain import BaseDomain
from salesdesk.common.enum import BaseEnum
from salesdesk.common.exceptions import InvalidDateRange, InvalidPeriod
from salesdesk.common.utils import (
    as_aware_utc,
    get_first_date_of_month,
    get_first_date_of_quarter,
    get_first_date_of_week,
    utcnow,
)

DATE_FORMAT = '%Y-%m-%d'
_END_OF_DAY = datetime.timedelta(days=1) - datetime.timedelta(microseconds=1)


class PeriodEnum(BaseEnum):
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    QUARTERLY = 'quarterly'

    @classmethod
    def parse(cls, raw: str | None) -> 'PeriodEnum':
        key = (raw or '').strip().lower()
        if not cls.has(key):
            raise InvalidPeriod()
        return cls(key)


class DateRange(BaseDomain):
    period: PeriodEnum
    start: datetime.datetime
    end: datetime.datetime

    @property
    def start_date(self) -> str:
        return self.start.strftime(DATE_FORMAT)

    @property
    def end_date(self) -> str:
        return self.end.strftime(DATE_FORMAT)


class DateBounds(BaseDomain):
    start: Optional[datetime.datetime] = None
    end: Optional[datetime.datetime] = None

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def validate_span(self, max_days: int | None = None) -> 'DateBounds':
        """
        Rejects windows longer than the analytics cap. Only checked when both
        sides are known, a half open window is always allowed.
        """
        max_days = settings.ANALYTICS_MAX_RANGE_DAYS if max_days is None else max_days
        if self.start is not None and self.end is not None:
            if self.end - self.start > datetime.timedelta(days=max_days):
                raise InvalidDateRange()
        return self


def _start_of_day(date: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(date, datetime.time.min, tzinfo=datetime.timezone.utc)


def resolve_period(period: str | None, now: datetime.datetime | None = None) -> DateRange:
    """
    weekly    -> Monday 00:00 of the current week through now
    monthly   -> 1st of the current month through now
    quarterly -> 1st of the current calendar quarter through now
    """
    period_key = PeriodEnum.parse(period)
    now = as_aware_utc(now) if now is not None else utcnow()

    if period_key == PeriodEnum.WEEKLY:
        start_date = get_first_date_of_week(now.date())
    elif period_key == PeriodEnum.MONTHLY:
        start_date = get_first_date_of_month(now.date())
    else:
        start_date = get_first_date_of_quarter(now.date())

    return DateRange(period=period_key, start=_start_of_day(start_date), end=now)


# Parsing twice against different defaults exposes any part the input left out
_DEFAULTS = (datetime.datetime(2000, 1, 1), datetime.datetime(2001, 2, 2))


def _parse_instant(raw: str | None) -> datetime.datetime | None:
    """
    Parsed in the offset it was written in. Partial dates such as "2024" or
    "Jan 2024" are unparsable, not silently completed from today.
    """
    if raw is None or not raw.strip():
        return None

    try:
        parsed, alternate = (date_parser.parse(raw.strip(), default=default) for default in _DEFAULTS)
    except (ValueError, OverflowError):
        logger.debug(f'ignoring unparsable date bound: {raw!r}')
        return None

    if parsed != alternate:
        logger.debug(f'ignoring incomplete date bound: {raw!r}')
        return None
    return parsed


def _is_date_only(raw: str, parsed: datetime.datetime) -> bool:
    return 'T' not in raw.upper() and parsed.time() == datetime.time.min


def parse_date_bounds(from_raw: str | None, to_raw: str | None) -> DateBounds:
    """
    A date only `to` covers that whole day, so `to=2024-01-31` includes
    everything that happened on the 31st. The time of day is judged in the
    offset the caller wrote, before converting to UTC.
    """
    start = _parse_instant(from_raw)
    end = _parse_instant(to_raw)

    if end is not None and _is_date_only(to_raw, end):
        end = end + _END_OF_DAY

    return DateBounds(
        start=as_aware_utc(start) if start is not None else None,
        end=as_aware_utc(end) if end is not None else None,
    )
