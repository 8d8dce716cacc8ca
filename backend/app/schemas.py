"""
Pydantic schemas for request and response validation.
"""

from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

# Messages used in the 400 ``{"errors": [...]}`` envelope when a required
# field is absent or blank. Keys are the field names as they appear in the
# request body.
REQUIRED_FIELD_MESSAGES = {
    "status": "Status is required",
    "skills": "Skills is required",
    "title": "Title is required",
    "company": "Company is required",
    "from": "From date is required",
    "school": "School is required",
    "degree": "Degree is required",
    "field_of_study": "Field of study is required",
    "fieldofstudy": "Field of study is required",
}

# Messages for date fields that are present but cannot be read as a date.
INVALID_DATE_MESSAGES = {
    "from": "From date must be a valid date",
    "to": "To date must be a valid date",
}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# =============================================================================
# Requests
# =============================================================================


class ProfileUpsertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    status: str = Field(min_length=1)
    skills: str = Field(min_length=1, description="Comma-separated list of skills")
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = Field(
        default=None,
        validation_alias=AliasChoices("github_username", "githubusername"),
    )
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("skills")
    @classmethod
    def skills_not_empty(cls, v: str) -> str:
        if not any(skill.strip() for skill in v.split(",")):
            raise PydanticCustomError("skills_empty", REQUIRED_FIELD_MESSAGES["skills"])
        return v


class _EntryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None

    @field_validator("to", "description", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        return _blank_to_none(v)


class ExperienceCreate(_EntryRequest):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str | None = None


class EducationCreate(_EntryRequest):
    school: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    field_of_study: str = Field(
        min_length=1,
        validation_alias=AliasChoices("field_of_study", "fieldofstudy"),
    )


# =============================================================================
# Stored sub-entries / responses
# =============================================================================


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str | None = None
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class EducationEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    field_of_study: str
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class SocialLinks(BaseModel):
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class OwnerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user: OwnerResponse
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    github_username: str | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: SocialLinks = Field(default_factory=SocialLinks)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    msg: str
