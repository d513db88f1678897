"""Pydantic models of the Firestore profile documents.

Documents use camelCase keys and store ``createdAt`` as epoch milliseconds,
which is the layout the mobile client reads and writes.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.entities.profile import (
    Contact,
    Education,
    Experience,
    Profile,
    ProfileStatus,
    Project,
)


class _Document(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class EducationDocument(_Document):
    degree: str = ""
    institution: str = ""
    year: str = ""


class ExperienceDocument(_Document):
    title: str = ""
    company: str = ""
    period: str = ""
    description: str = ""


class ProjectDocument(_Document):
    title: str = ""
    description: str = ""
    image: str | None = None


class ContactDocument(_Document):
    email: str = ""
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


class ProfileDocument(_Document):
    """A document in the profiles collection, keyed by username."""

    id: str
    username: str
    name: str = ""
    status: ProfileStatus = ProfileStatus.VISITOR
    avatar: str = ""
    active: bool = True
    visible: bool = True
    resume: str | None = None
    bio: str = ""
    role: str = ""
    about: str = ""
    education: dict[str, EducationDocument] = Field(default_factory=dict)
    experience: dict[str, ExperienceDocument] = Field(default_factory=dict)
    projects: dict[str, ProjectDocument] = Field(default_factory=dict)
    contact: ContactDocument = Field(default_factory=ContactDocument)
    created_at: int = 0

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileDocument":
        return cls(
            id=profile.id,
            username=profile.username,
            name=profile.name,
            status=profile.status,
            avatar=profile.avatar or "",
            active=profile.active,
            visible=profile.visible,
            resume=profile.resume,
            bio=profile.bio,
            role=profile.role,
            about=profile.about,
            education={
                key: EducationDocument(**vars(entry))
                for key, entry in profile.education.items()
            },
            experience={
                key: ExperienceDocument(**vars(entry))
                for key, entry in profile.experience.items()
            },
            projects={
                key: ProjectDocument(**vars(entry))
                for key, entry in profile.projects.items()
            },
            contact=ContactDocument(**vars(profile.contact)),
            created_at=int(profile.created_at.timestamp() * 1000),
        )

    def to_entity(self) -> Profile:
        return Profile(
            id=self.id,
            username=self.username,
            name=self.name,
            status=self.status,
            avatar=self.avatar or None,
            active=self.active,
            visible=self.visible,
            resume=self.resume,
            bio=self.bio,
            role=self.role,
            about=self.about,
            education={
                key: Education(**entry.model_dump())
                for key, entry in self.education.items()
            },
            experience={
                key: Experience(**entry.model_dump())
                for key, entry in self.experience.items()
            },
            projects={
                key: Project(**entry.model_dump())
                for key, entry in self.projects.items()
            },
            contact=Contact(**self.contact.model_dump()),
            created_at=datetime.fromtimestamp(self.created_at / 1000, tz=timezone.utc),
        )

    def to_firestore(self) -> dict[str, Any]:
        """Serialize with camelCase keys for ``DocumentReference.set``."""
        return self.model_dump(by_alias=True, mode="json")
