"""Skill catalogue endpoint."""

from fastapi import APIRouter

from vanzone.schemas.profile import SkillItem
from vanzone.skills import SKILL_METADATA

router = APIRouter(prefix="/api/skills", tags=["skills"])


@router.get("", response_model=list[SkillItem])
async def list_skills() -> list[SkillItem]:
    """List every skill with its badge label and color."""
    return [
        SkillItem(skill=d.skill, label=d.label, color=d.color) for d in SKILL_METADATA.values()
    ]
