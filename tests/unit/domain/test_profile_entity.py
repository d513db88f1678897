"""Unit tests for Profile entities."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from domain.entities.profile import Contact, Profile, ProfileStatus


class TestProfileNew:
    def test_sets_identity_and_contact_email(self):
        profile = Profile.new("uid-1", "maria_ds", "Maria", "maria@example.com")

        assert profile.id == "uid-1"
        assert profile.username == "maria_ds"
        assert profile.contact == Contact(email="maria@example.com")
        assert profile.status == ProfileStatus.VISITOR
        assert profile.education == {}
        assert profile.experience == {}
        assert profile.projects == {}

    def test_created_at_is_recent_utc(self):
        before = datetime.now(timezone.utc)
        profile = Profile.new("uid-1", "maria_ds", "Maria", "maria@example.com")

        assert before <= profile.created_at <= datetime.now(timezone.utc)

    def test_accepts_extra_fields(self):
        profile = Profile.new(
            "uid-1", "maria_ds", "Maria", "maria@example.com", role="Designer"
        )

        assert profile.role == "Designer"


class TestProfileValueSemantics:
    def test_is_immutable(self, sample_profile: Profile):
        with pytest.raises(FrozenInstanceError):
            sample_profile.name = "Other"  # type: ignore[misc]

    def test_structural_equality(self, sample_profile: Profile):
        assert sample_profile.copy_with() == sample_profile

    def test_copy_with_keeps_other_fields(self, sample_profile: Profile):
        copy = sample_profile.copy_with(bio="New bio")

        assert copy.bio == "New bio"
        assert copy.name == sample_profile.name
        assert copy.created_at == sample_profile.created_at
        assert sample_profile.bio == "Passionate UX/UI designer."

    def test_get_reads_top_level_and_contact_fields(self, sample_profile: Profile):
        assert sample_profile.get("name") == "Maria Dos Santos"
        assert sample_profile.get("github") == "https://github.com/maria-dos-santos"
        assert sample_profile.get("email") == "maria_ds@gmail.com"
