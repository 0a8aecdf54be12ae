"""Skill catalogue: display metadata for every known skill."""

from __future__ import annotations

from dataclasses import dataclass

from vanzone.models.profile import Skill


@dataclass(frozen=True)
class SkillDef:
    """Display metadata for a single skill."""

    skill: Skill
    label: str  # Human-readable label for UI
    color: str  # Badge background, hex


_SKILLS: list[SkillDef] = [
    SkillDef(Skill.MECHANIC, "Mechanic", "#E07A5F"),
    SkillDef(Skill.PLUMBING, "Plumbing", "#81B29A"),
    SkillDef(Skill.DECORATION, "Decoration", "#F2CC8F"),
    SkillDef(Skill.CONSTRUCTION, "Construction", "#D4A373"),
    SkillDef(Skill.ELECTRICITY, "Electricity", "#F4A261"),
    SkillDef(Skill.CARPENTRY, "Carpentry", "#8B4513"),
]

SKILL_METADATA: dict[Skill, SkillDef] = {s.skill: s for s in _SKILLS}

# Enumeration order, used to store skill sets deterministically
ALL_SKILLS: tuple[Skill, ...] = tuple(Skill)


def normalize_skills(skills: list[Skill] | None, main_specialty: Skill | None = None) -> list[Skill]:
    """Deduplicate skills in enumeration order, adding the main specialty if missing."""
    chosen = set(skills or [])
    if main_specialty is not None:
        chosen.add(main_specialty)
    return [skill for skill in ALL_SKILLS if skill in chosen]
