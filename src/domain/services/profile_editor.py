"""Pure edit operations on Profile values.

Every function takes a profile and returns a new one; the input profile and
its mappings are never mutated. Keyed collections are copied before insert.
"""

from dataclasses import replace
from typing import Callable, Mapping, TypeVar
from uuid import uuid4

from domain.entities.profile import (
    CONTACT_FIELDS,
    Education,
    Experience,
    Profile,
    Project,
)

SCALAR_FIELDS = frozenset({"name", "bio", "about", "resume", "avatar"})
EDITABLE_FIELDS = SCALAR_FIELDS | CONTACT_FIELDS

KeyFactory = Callable[[], str]

T = TypeVar("T")


def new_key() -> str:
    """Generate a random collection key."""
    return str(uuid4())


def set_field(profile: Profile, field_name: str, value: str | None) -> Profile:
    """Replace one scalar or contact field.

    Raises:
        ValueError: ``field_name`` is not an editable field.
    """
    if field_name in SCALAR_FIELDS:
        return profile.copy_with(**{field_name: value})
    if field_name in CONTACT_FIELDS:
        return profile.copy_with(contact=replace(profile.contact, **{field_name: value}))
    raise ValueError(
        f"Unknown profile field {field_name!r}; expected one of {sorted(EDITABLE_FIELDS)}"
    )


def _insert(
    entries: Mapping[str, T], value: T, key_factory: KeyFactory
) -> tuple[dict[str, T], str]:
    key = key_factory()
    while key in entries:
        key = key_factory()
    updated = dict(entries)
    updated[key] = value
    return updated, key


def _upsert(entries: Mapping[str, T], key: str, value: T) -> dict[str, T]:
    updated = dict(entries)
    updated[key] = value
    return updated


def add_education(
    profile: Profile, education: Education, key_factory: KeyFactory = new_key
) -> tuple[Profile, str]:
    """Add an education entry under a fresh key; returns the profile and the key."""
    entries, key = _insert(profile.education, education, key_factory)
    return profile.copy_with(education=entries), key


def add_experience(
    profile: Profile, experience: Experience, key_factory: KeyFactory = new_key
) -> tuple[Profile, str]:
    """Add an experience entry under a fresh key; returns the profile and the key."""
    entries, key = _insert(profile.experience, experience, key_factory)
    return profile.copy_with(experience=entries), key


def add_project(
    profile: Profile, project: Project, key_factory: KeyFactory = new_key
) -> tuple[Profile, str]:
    """Add a project under a fresh key; returns the profile and the key."""
    entries, key = _insert(profile.projects, project, key_factory)
    return profile.copy_with(projects=entries), key


# The update_* functions set the key unconditionally. A key that is not in the
# mapping is inserted rather than rejected.


def update_education(profile: Profile, key: str, education: Education) -> Profile:
    """Replace the education entry at ``key`` (inserts if absent)."""
    return profile.copy_with(education=_upsert(profile.education, key, education))


def update_experience(profile: Profile, key: str, experience: Experience) -> Profile:
    """Replace the experience entry at ``key`` (inserts if absent)."""
    return profile.copy_with(experience=_upsert(profile.experience, key, experience))


def update_project(profile: Profile, key: str, project: Project) -> Profile:
    """Replace the project at ``key`` (inserts if absent)."""
    return profile.copy_with(projects=_upsert(profile.projects, key, project))
