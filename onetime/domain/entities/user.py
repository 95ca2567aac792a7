from datetime import datetime  # For timestamp fields
from typing import Optional  # For optional fields

from sqlalchemy import DateTime  # For explicit timezone-aware columns
from sqlmodel import Column, Field, SQLModel, String  # For ORM and table definition


class User(SQLModel, table=True):
    """Represents the part of a user record a reminder completion touches.

    Only the credential-related fields live here; profile data belongs to the
    application that owns the user directory.

    Attributes:
        id: The unique identifier for the user (primary key).
        username: A unique username, used for logging context only.
        hashed_password: The bcrypt hash of the current password.
        is_active: Whether the account is active.
        updated_at: The timestamp of the last credential update.
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,  # Auto-incremented by database
        primary_key=True,
        description="The unique identifier for the user.",
    )
    username: str = Field(
        sa_column=Column(String, unique=True, index=True, nullable=False),
        min_length=3,
        max_length=50,
        description="Unique username.",
    )
    hashed_password: Optional[str] = Field(
        default=None,
        max_length=255,  # Sufficient for bcrypt hashes
        description="Bcrypt-hashed password.",
    )
    is_active: bool = Field(
        default=False,  # Activated once an activation completes
        description="Indicates if the user's account is active.",
    )
    updated_at: Optional[datetime] = Field(
        sa_column=Column(DateTime(timezone=True), nullable=True),
        default=None,
        description="The timestamp of the last credential update.",
    )
