"""SQLAlchemy ORM models."""

from vanzone.models.profile import Profile, Skill

__all__ = [
    "Profile",
    "Skill",
]
