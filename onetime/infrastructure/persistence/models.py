"""SQLModel tables for activations and reminders.

The two kinds share one column layout, declared once on ``TokenRecordBase``
and materialised into two tables. ``code`` is indexed but not unique.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class TokenRecordBase(SQLModel):
    """Columns shared by both token tables."""

    id: Optional[int] = Field(
        default=None,  # Auto-incremented by database
        primary_key=True,
    )
    user_id: int = Field(index=True, nullable=False)
    code: str = Field(index=True, max_length=255, nullable=False)
    completed: bool = Field(default=False, nullable=False)
    completed_at: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
        nullable=True,
    )
    created_at: datetime = Field(
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
        index=True,
        nullable=False,
    )


class ActivationRecord(TokenRecordBase, table=True):
    __tablename__ = "activations"


class ReminderRecord(TokenRecordBase, table=True):
    __tablename__ = "reminders"
