"""Schemas for profile management."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, model_validator

from vanzone.models.profile import Profile, Skill
from vanzone.schemas.location import Coordinates
from vanzone.skills import normalize_skills

Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=2,
        max_length=30,
        pattern=r"^[a-zA-ZÀ-ÿ0-9\s\-_&]+$",
    ),
]
VanName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=1,
        max_length=50,
        pattern=r"^[a-zA-ZÀ-ÿ0-9\s\-_']*$",
    ),
]
CityLabel = Annotated[str, StringConstraints(strip_whitespace=True, max_length=100)]


class UserProfile(BaseModel):
    """Full profile, including the exact position. Returned to the owner only."""

    id: str
    username: str
    van_name: str | None = None
    van_photo_url: str | None = None
    exact_location: Coordinates | None = None
    city: str | None = None
    main_specialty: Skill | None = None
    skills: list[Skill] = Field(default_factory=list)
    days_on_road: int = Field(default=0, ge=0)
    connections_count: int = Field(default=0, ge=0)
    is_visible: bool = True
    last_location_update: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def include_main_specialty(self) -> "UserProfile":
        """Keep the main specialty a member of the skill set."""
        self.skills = normalize_skills(self.skills, self.main_specialty)
        return self

    @classmethod
    def from_model(cls, row: Profile) -> "UserProfile":
        """Build from an ORM row, folding latitude/longitude into exact_location."""
        location = None
        if row.has_location:
            location = Coordinates(latitude=row.latitude, longitude=row.longitude)
        return cls(
            id=str(row.id),
            username=row.username,
            van_name=row.van_name,
            van_photo_url=row.van_photo_url,
            exact_location=location,
            city=row.city,
            main_specialty=row.main_specialty,
            skills=row.skills or [],
            days_on_road=row.days_on_road or 0,
            connections_count=row.connections_count or 0,
            is_visible=row.is_visible if row.is_visible is not None else True,
            last_location_update=row.last_location_update,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class ProfileCreate(BaseModel):
    """Create the caller's profile."""

    username: Username
    van_name: VanName | None = None
    van_photo_url: str | None = Field(default=None, max_length=500)
    city: CityLabel | None = None
    main_specialty: Skill | None = None
    skills: list[Skill] = Field(default_factory=list)
    days_on_road: int = Field(default=0, ge=0)
    is_visible: bool = True

    @model_validator(mode="after")
    def include_main_specialty(self) -> "ProfileCreate":
        """Keep the main specialty a member of the skill set."""
        self.skills = normalize_skills(self.skills, self.main_specialty)
        return self


class ProfileUpdate(BaseModel):
    """Partial edit of the caller's own profile attributes."""

    username: Username | None = None
    van_name: VanName | None = None
    van_photo_url: str | None = Field(default=None, max_length=500)
    city: CityLabel | None = None
    main_specialty: Skill | None = None
    skills: list[Skill] | None = None
    days_on_road: int | None = Field(default=None, ge=0)
    is_visible: bool | None = None


class LocationUpdate(BaseModel):
    """New exact position reported by the owner's device."""

    latitude: float
    longitude: float
    city: CityLabel | None = None


class LocationUpdateResult(BaseModel):
    """Whether the stored exact position actually changed."""

    changed: bool


class SkillItem(BaseModel):
    """Skill with its display metadata."""

    skill: Skill
    label: str
    color: str
