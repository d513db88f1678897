"""Pydantic schemas for the Profile and Profile Editor APIs."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfileStatus,
    Project,
)
from domain.services.edit_session import ProfileEditSession


class EducationSchema(BaseModel):
    """Schema for an education entry."""

    degree: str = Field("", max_length=200)
    institution: str = Field("", max_length=200)
    year: str = Field("", max_length=50)

    def to_entity(self) -> Education:
        return Education(degree=self.degree, institution=self.institution, year=self.year)


class ExperienceSchema(BaseModel):
    """Schema for an experience entry."""

    title: str = Field("", max_length=200)
    company: str = Field("", max_length=200)
    period: str = Field("", max_length=100)
    description: str = Field("", max_length=5000)

    def to_entity(self) -> Experience:
        return Experience(
            title=self.title,
            company=self.company,
            period=self.period,
            description=self.description,
        )


class ProjectSchema(BaseModel):
    """Schema for a project."""

    title: str = Field("", max_length=200)
    description: str = Field("", max_length=5000)
    image: str | None = Field(None, max_length=2048)

    def to_entity(self) -> Project:
        return Project(title=self.title, description=self.description, image=self.image)


class ContactSchema(BaseModel):
    email: str
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "auth_user_id",
                "username": "maria_ds",
                "name": "Maria Dos Santos",
                "status": "visitor",
                "avatar": "https://randomuser.me/api/portraits/women/50.jpg",
                "active": True,
                "visible": True,
                "resume": "https://www.hloom.com/sample.pdf",
                "bio": "Passionate UX/UI designer.",
                "role": "Lead Designer",
                "about": "Five years of experience in UX/UI for mobile applications.",
                "education": {
                    "0": {
                        "degree": "Bachelor of Design",
                        "institution": "University of Sao Paulo",
                        "year": "2019",
                    }
                },
                "experience": {},
                "projects": {},
                "contact": {"email": "maria_ds@gmail.com"},
                "created_at": "2024-06-01T10:00:00Z",
            }
        },
    )

    id: str
    username: str
    name: str
    status: ProfileStatus
    avatar: str | None
    active: bool
    visible: bool
    resume: str | None
    bio: str
    role: str
    about: str
    education: dict[str, EducationSchema]
    experience: dict[str, ExperienceSchema]
    projects: dict[str, ProjectSchema]
    contact: ContactSchema
    created_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            username=profile.username,
            name=profile.name,
            status=profile.status,
            avatar=profile.avatar,
            active=profile.active,
            visible=profile.visible,
            resume=profile.resume,
            bio=profile.bio,
            role=profile.role,
            about=profile.about,
            education={k: EducationSchema(**vars(v)) for k, v in profile.education.items()},
            experience={k: ExperienceSchema(**vars(v)) for k, v in profile.experience.items()},
            projects={k: ProjectSchema(**vars(v)) for k, v in profile.projects.items()},
            contact=ContactSchema(**vars(profile.contact)),
            created_at=profile.created_at,
        )


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileCreate(BaseModel):
    """Schema for first-time profile setup."""

    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_.]+$")
    name: str = Field("", max_length=100)
    role: str = Field("", max_length=100)
    bio: str = Field("", max_length=500)
    about: str = Field("", max_length=5000)


EditableField = Literal[
    "name", "bio", "about", "resume", "avatar", "email", "phone", "linkedin", "github"
]


class FieldUpdate(BaseModel):
    """Schema for replacing one scalar or contact field."""

    field: EditableField
    value: str | None = Field(None, max_length=5000)


class EditorState(BaseModel):
    """Schema for the state of an edit session."""

    state: str
    has_pending_image: bool
    profile: ProfileResponse

    @classmethod
    def from_session(cls, session: ProfileEditSession) -> "EditorState":
        return cls(
            state=session.state.value,
            has_pending_image=session.has_pending_image,
            profile=ProfileResponse.from_entity(session.profile),
        )


class EditorResponse(BaseModel):
    data: EditorState


class EntryCreatedResponse(BaseModel):
    """Schema returned when an entry is added; ``key`` addresses it in later updates."""

    key: str
    data: EditorState
