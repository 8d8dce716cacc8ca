"""
Profile management endpoints.

Private routes resolve the caller through ``get_current_principal``; public
routes (listing, lookup by user, GitHub) need no token.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.errors import InvalidReferenceError, NotFound
from devconnect.logging import get_logger
from devconnect.models import Profile
from devconnect.repositories import ProfileRepository, UserRepository
from devconnect.services import GitHubService

from ..auth.dependencies import get_current_principal, get_db, get_github_service, json_body
from ..auth.jwt import Principal
from ..schemas import (
    EducationCreate,
    ExperienceCreate,
    MessageResponse,
    ProfileResponse,
    ProfileUpsertRequest,
)
from ..services import profile_service

logger = get_logger("profile")

router = APIRouter(prefix="/profile", tags=["profile"])


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Convert Profile (with owner loaded) to response."""
    return ProfileResponse.model_validate(profile)


@router.get("/me", response_model=ProfileResponse)
async def get_own_profile(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Get current user's profile."""
    profile = await ProfileRepository(db).get_by_user_id(principal.user_id)
    if not profile:
        raise NotFound("There is no profile for this user", status_code=400)
    return _profile_to_response(profile)


@router.post("", response_model=ProfileResponse)
@router.post("/", response_model=ProfileResponse, include_in_schema=False)
async def create_or_update_profile(
    principal: Principal = Depends(get_current_principal),
    payload: ProfileUpsertRequest = Depends(json_body(ProfileUpsertRequest)),
    db: AsyncSession = Depends(get_db),
):
    """Create the caller's profile, or update the fields supplied."""
    profile = await profile_service.upsert_profile(db, principal.user_id, payload)
    await db.commit()
    return _profile_to_response(profile)


@router.get("", response_model=list[ProfileResponse])
@router.get("/", response_model=list[ProfileResponse], include_in_schema=False)
async def list_profiles(db: AsyncSession = Depends(get_db)):
    """Get all profiles."""
    profiles = await ProfileRepository(db).list_with_owners()
    return [_profile_to_response(profile) for profile in profiles]


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user(user_id: str, db: AsyncSession = Depends(get_db)):
    """Get a profile by its owner's ID."""
    try:
        profile = await ProfileRepository(db).get_by_user_id(user_id)
    except InvalidReferenceError:
        logger.info("profile_lookup_malformed_id", user_id=user_id)
        raise NotFound("Profile not found", status_code=400) from None

    if not profile:
        raise NotFound("Profile not found", status_code=400)
    return _profile_to_response(profile)


@router.delete("", response_model=MessageResponse)
@router.delete("/", response_model=MessageResponse, include_in_schema=False)
async def delete_profile_and_account(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete the caller's profile and account.

    The user's other content is not removed.
    """
    profile_deleted = await ProfileRepository(db).delete_by_user_id(principal.user_id)
    user_deleted = await UserRepository(db).delete(principal.user_id)
    await db.commit()

    logger.info(
        "account_deleted",
        user_id=principal.user_id,
        profile_deleted=profile_deleted,
        user_deleted=user_deleted,
    )
    return MessageResponse(msg="User Removed")


@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    principal: Principal = Depends(get_current_principal),
    payload: ExperienceCreate = Depends(json_body(ExperienceCreate)),
    db: AsyncSession = Depends(get_db),
):
    """Add an experience entry at the top of the caller's list."""
    profile = await profile_service.add_experience(db, principal.user_id, payload)
    await db.commit()
    return _profile_to_response(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def delete_experience(
    exp_id: str,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Remove an experience entry by ID."""
    profile = await profile_service.remove_entry(db, principal.user_id, "experience", exp_id)
    await db.commit()
    return _profile_to_response(profile)


@router.put("/education", response_model=ProfileResponse)
async def add_education(
    principal: Principal = Depends(get_current_principal),
    payload: EducationCreate = Depends(json_body(EducationCreate)),
    db: AsyncSession = Depends(get_db),
):
    """Add an education entry at the top of the caller's list."""
    profile = await profile_service.add_education(db, principal.user_id, payload)
    await db.commit()
    return _profile_to_response(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def delete_education(
    edu_id: str,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
):
    """Remove an education entry by ID."""
    profile = await profile_service.remove_entry(db, principal.user_id, "education", edu_id)
    await db.commit()
    return _profile_to_response(profile)


@router.get("/github/{username}")
async def get_github_repos(
    username: str,
    github: GitHubService = Depends(get_github_service),
):
    """Relay the user's five most recently created GitHub repositories."""
    return await github.list_recent_repos(username)
