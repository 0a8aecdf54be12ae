"""Profile model for van-dwellers."""

import enum
from datetime import datetime
from uuid import uuid4

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Double, Integer, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from vanzone.database import Base, utc_now


class Skill(enum.StrEnum):
    """Skill a van-dweller can offer."""

    MECHANIC = "mechanic"
    PLUMBING = "plumbing"
    DECORATION = "decoration"
    CONSTRUCTION = "construction"
    ELECTRICITY = "electricity"
    CARPENTRY = "carpentry"


class Profile(Base):
    """A user's public profile and private exact position.

    The primary key is the owning identity's user id, one profile per user.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Public attributes
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    van_name: Mapped[str | None] = mapped_column(String(50))
    van_photo_url: Mapped[str | None] = mapped_column(String(500))
    city: Mapped[str | None] = mapped_column(String(100))
    main_specialty: Mapped[str | None] = mapped_column(String(20))
    skills: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list, server_default=text("'[]'")
    )
    days_on_road: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    connections_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    is_visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("TRUE"), index=True
    )

    # Exact position (owner-only), both set or both null
    latitude: Mapped[float | None] = mapped_column(Double, index=True)
    longitude: Mapped[float | None] = mapped_column(Double)
    last_location_update: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
    )

    __table_args__ = (
        CheckConstraint(
            "(latitude IS NULL) = (longitude IS NULL)",
            name="ck_profiles_location_pair",
        ),
        CheckConstraint(
            "latitude IS NULL OR (latitude BETWEEN -90 AND 90 AND longitude BETWEEN -180 AND 180)",
            name="ck_profiles_location_range",
        ),
    )

    @property
    def has_location(self) -> bool:
        """Check if the owner has reported a position yet."""
        return self.latitude is not None and self.longitude is not None
