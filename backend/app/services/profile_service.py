"""
Profile management service functions.
"""

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.logging import get_logger
from devconnect.models import Profile
from devconnect.repositories import ProfileRepository

from ..schemas import (
    EducationCreate,
    EducationEntry,
    ExperienceCreate,
    ExperienceEntry,
    ProfileUpsertRequest,
)

logger = get_logger("profile.service")

SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "github_username")
SOCIAL_FIELDS = ("twitter", "facebook", "linkedin", "instagram")


def parse_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string, trimming each element."""
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


def build_profile_fields(payload: ProfileUpsertRequest) -> dict[str, Any]:
    """
    Build the partial update for a create/update call.

    Only fields supplied with a non-empty value are included, so an update
    never clears a column the caller left out. Social links travel as one
    record and replace the stored one when any link is supplied.
    """
    fields: dict[str, Any] = {}
    for name in SCALAR_FIELDS:
        value = getattr(payload, name)
        if value:
            fields[name] = value

    fields["skills"] = parse_skills(payload.skills)

    social = {name: getattr(payload, name) for name in SOCIAL_FIELDS if getattr(payload, name)}
    if social:
        fields["social"] = social

    return fields


def _new_entry_id() -> str:
    return uuid.uuid4().hex


async def upsert_profile(db: AsyncSession, user_id: int, payload: ProfileUpsertRequest) -> Profile:
    """Create the caller's profile or update the existing one in place."""
    fields = build_profile_fields(payload)
    profile = await ProfileRepository(db).upsert(user_id, fields)
    logger.info("profile_upserted", user_id=user_id, fields=sorted(fields))
    return profile


async def add_experience(db: AsyncSession, user_id: int, payload: ExperienceCreate) -> Profile:
    entry = ExperienceEntry(id=_new_entry_id(), **payload.model_dump())
    profile = await ProfileRepository(db).prepend_entry(
        user_id, "experience", entry.model_dump(mode="json", by_alias=True)
    )
    logger.info("experience_added", user_id=user_id, entry_id=entry.id)
    return profile


async def add_education(db: AsyncSession, user_id: int, payload: EducationCreate) -> Profile:
    entry = EducationEntry(id=_new_entry_id(), **payload.model_dump())
    profile = await ProfileRepository(db).prepend_entry(
        user_id, "education", entry.model_dump(mode="json", by_alias=True)
    )
    logger.info("education_added", user_id=user_id, entry_id=entry.id)
    return profile


async def remove_entry(db: AsyncSession, user_id: int, section: str, entry_id: str) -> Profile:
    """Remove one experience/education entry. Unknown IDs leave the profile as is."""
    return await ProfileRepository(db).remove_entry(user_id, section, entry_id)
