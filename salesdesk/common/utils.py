import datetime
import uuid


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def naive_utcnow() -> datetime.datetime:
    """
    Columns are stored as naive UTC, use this for python side defaults
    """
    return utcnow().replace(tzinfo=None)


def as_naive_utc(dt: datetime.datetime) -> datetime.datetime:
    """
    Normalises any datetime for comparison against naive UTC columns.
    Naive inputs are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(datetime.timezone.utc).replace(tzinfo=None)


def as_aware_utc(dt: datetime.datetime) -> datetime.datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def get_first_date_of_month(date: datetime.date) -> datetime.date:
    return datetime.date(date.year, date.month, 1)


def get_first_date_of_quarter(date: datetime.date) -> datetime.date:
    start_month = date.month - ((date.month - 1) % 3)
    return datetime.date(date.year, start_month, 1)


def get_first_date_of_week(date: datetime.date) -> datetime.date:
    # Weeks start on Monday
    return date - datetime.timedelta(days=date.weekday())


def safe_uuid_parse(value: str | None) -> str | None:
    """
    Canonical string form of a UUID or None when it is not one
    """
    if not value:
        return None
    try:
        return str(uuid.UUID(value.strip()))
    except (ValueError, AttributeError):
        return None


def generate_uuid() -> str:
    return str(uuid.uuid4())
