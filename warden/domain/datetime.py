from datetime import datetime, timezone, tzinfo
from typing import Self


class UtcDatetime(datetime):
    """
    A datetime which is always timezone aware and always in UTC. Stringifying
    a UtcDatetime gives a stable, sortable format which is also what gets
    written to the database.
    """

    @classmethod
    def fromisoformat(cls, date: str) -> Self:
        dt = super().fromisoformat(date.replace("Z", "+00:00"))

        if dt.tzinfo is None:
            raise ValueError(f"Datetime `{date}` is missing a timezone")

        dt = dt.astimezone(timezone.utc)
        dt.__class__ = cls

        return dt

    @classmethod
    def now(cls, tz: tzinfo | None = timezone.utc) -> Self:
        assert tz == timezone.utc

        dt = super().now(tz)
        dt.__class__ = cls

        return dt

    def __str__(self) -> str:
        return super().__str__().replace("+00:00", "Z").replace("T", " ")

    __repr__ = __str__
