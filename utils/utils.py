from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_timestamp(previous: datetime) -> datetime:
    # updated_at must move forward even when the clock has not ticked
    return max(utc_now(), previous + timedelta(microseconds=1))


def to_decimal(value: int | float | str | Decimal) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
