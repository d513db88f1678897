"""Profile domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Mapping


class ProfileStatus(StrEnum):
    """Membership tag shown on a portfolio."""

    VISITOR = "visitor"
    MEMBER = "member"


@dataclass(frozen=True)
class Education:
    """An education entry."""

    degree: str
    institution: str
    year: str


@dataclass(frozen=True)
class Experience:
    """A work experience entry. ``period`` is free text, e.g. "2019 - 2024"."""

    title: str
    company: str
    period: str
    description: str


@dataclass(frozen=True)
class Project:
    """A portfolio project."""

    title: str
    description: str
    image: str | None = None


@dataclass(frozen=True)
class Contact:
    """Contact details embedded in a profile."""

    email: str
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None


CONTACT_FIELDS = frozenset({"email", "phone", "linkedin", "github"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Profile:
    """Aggregate root for a user's portfolio.

    ``id`` is the identity-provider uid and ``username`` the public handle;
    neither changes after creation, and neither does ``created_at``.
    Keyed collections map generated string keys to entries.
    """

    id: str
    username: str
    name: str
    contact: Contact
    status: ProfileStatus = ProfileStatus.VISITOR
    avatar: str | None = None
    active: bool = True
    visible: bool = True
    resume: str | None = None
    bio: str = ""
    role: str = ""
    about: str = ""
    education: Mapping[str, Education] = field(default_factory=dict)
    experience: Mapping[str, Experience] = field(default_factory=dict)
    projects: Mapping[str, Project] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def new(
        cls,
        user_id: str,
        username: str,
        name: str,
        email: str,
        **fields: Any,
    ) -> "Profile":
        """Build the first profile for an account completing setup."""
        return cls(
            id=user_id,
            username=username,
            name=name,
            contact=Contact(email=email),
            created_at=_utcnow(),
            **fields,
        )

    def get(self, field_name: str) -> Any:
        """Read a top-level field, or a contact sub-field by its bare name."""
        if field_name in CONTACT_FIELDS:
            return getattr(self.contact, field_name)
        return getattr(self, field_name)

    def copy_with(self, **changes: Any) -> "Profile":
        """Return a copy with ``changes`` applied and every other field kept."""
        return replace(self, **changes)
