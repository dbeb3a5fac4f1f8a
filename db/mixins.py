from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func

from utils.utils import as_utc, next_timestamp


class TimestampMixin:
    """Audit columns whose values are supplied by the domain layer.

    ``server_default`` only fills rows written outside the application.
    SQLite hands datetimes back naive, so reads go through ``as_utc``.
    """

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def created_at_utc(self) -> datetime:
        return as_utc(self.created_at)

    @property
    def updated_at_utc(self) -> datetime:
        return as_utc(self.updated_at)

    def touch(self) -> None:
        self.updated_at = next_timestamp(self.updated_at_utc)
