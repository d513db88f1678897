"""Integration tests for Profile Editor API."""

from collections.abc import AsyncIterator

import pytest
from httpx import AsyncClient

from core.config import settings
from domain.entities.profile import Profile
from tests.fakes import InMemoryMediaGateway, InMemoryProfileStore

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def stored_profile(profile_store: InMemoryProfileStore, sample_profile: Profile) -> Profile:
    profile_store.profiles[sample_profile.username] = sample_profile
    profile_store.users[sample_profile.id] = {
        "username": sample_profile.username,
        "hasProfile": True,
    }
    return sample_profile


@pytest.fixture
async def editor(authenticated_client: AsyncClient, stored_profile: Profile) -> AsyncClient:
    """Authenticated client with an open edit session."""
    response = await authenticated_client.post("/api/v1/profile-editor")
    assert response.status_code == 201
    return authenticated_client


class TestEditSessionLifecycle:
    @pytest.mark.asyncio
    async def test_open_loads_profile(self, editor: AsyncClient) -> None:
        response = await editor.get("/api/v1/profile-editor")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["state"] == "editing"
        assert data["has_pending_image"] is False
        assert data["profile"]["username"] == "maria_ds"

    @pytest.mark.asyncio
    async def test_open_without_profile(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.post("/api/v1/profile-editor")

        assert response.status_code == 404
        assert response.json()["error_code"] == "USERNAME_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_without_session(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.get("/api/v1/profile-editor")

        assert response.status_code == 404
        assert response.json()["error_code"] == "EDIT_SESSION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_close_discards_session(self, editor: AsyncClient) -> None:
        response = await editor.delete("/api/v1/profile-editor")

        assert response.status_code == 204
        assert (await editor.get("/api/v1/profile-editor")).status_code == 404

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/profile-editor")

        assert response.status_code == 401


class TestEdits:
    @pytest.mark.asyncio
    async def test_edits_are_not_persisted_until_save(
        self, editor: AsyncClient, profile_store: InMemoryProfileStore
    ) -> None:
        response = await editor.patch(
            "/api/v1/profile-editor/fields", json={"field": "bio", "value": "Hello!"}
        )

        assert response.json()["data"]["profile"]["bio"] == "Hello!"
        assert profile_store.profiles["maria_ds"].bio == "Passionate UX/UI designer."
        assert profile_store.save_calls == []

    @pytest.mark.asyncio
    async def test_set_contact_field(self, editor: AsyncClient) -> None:
        response = await editor.patch(
            "/api/v1/profile-editor/fields", json={"field": "phone", "value": None}
        )

        assert response.json()["data"]["profile"]["contact"]["phone"] is None

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, editor: AsyncClient) -> None:
        response = await editor.patch(
            "/api/v1/profile-editor/fields", json={"field": "username", "value": "x"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_add_education_returns_new_key(self, editor: AsyncClient) -> None:
        entry = {"degree": "MBA", "institution": "FGV", "year": "2023"}

        first = await editor.post("/api/v1/profile-editor/education", json=entry)
        second = await editor.post("/api/v1/profile-editor/education", json=entry)

        assert first.status_code == 201
        assert first.json()["key"] != second.json()["key"]
        education = second.json()["data"]["profile"]["education"]
        assert len(education) == 3
        assert education[first.json()["key"]] == entry

    @pytest.mark.asyncio
    async def test_update_experience(self, editor: AsyncClient) -> None:
        entry = {
            "title": "Design Director",
            "company": "TechWave",
            "period": "2024 - now",
            "description": "Leading the design team.",
        }

        response = await editor.put("/api/v1/profile-editor/experience/0", json=entry)

        assert response.status_code == 200
        assert response.json()["data"]["profile"]["experience"] == {"0": entry}

    @pytest.mark.asyncio
    async def test_update_unknown_project_key_inserts(self, editor: AsyncClient) -> None:
        project = {"title": "New", "description": "Desc", "image": None}

        response = await editor.put("/api/v1/profile-editor/projects/new-key", json=project)

        projects = response.json()["data"]["profile"]["projects"]
        assert projects["new-key"] == project
        assert "0" in projects

    @pytest.mark.asyncio
    async def test_add_project(self, editor: AsyncClient) -> None:
        response = await editor.post(
            "/api/v1/profile-editor/projects",
            json={"title": "Portfolio", "description": "Personal site."},
        )

        key = response.json()["key"]
        assert response.json()["data"]["profile"]["projects"][key]["title"] == "Portfolio"

    @pytest.mark.asyncio
    async def test_stage_empty_avatar_rejected(self, editor: AsyncClient) -> None:
        response = await editor.put("/api/v1/profile-editor/avatar", content=b"")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_stage_oversized_avatar_rejected(
        self, editor: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "max_image_bytes", 16)

        response = await editor.put("/api/v1/profile-editor/avatar", content=PNG)

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "avatar"}
        state = (await editor.get("/api/v1/profile-editor")).json()["data"]
        assert state["has_pending_image"] is False

    @pytest.mark.asyncio
    async def test_stage_oversized_streamed_avatar_rejected(
        self, editor: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A body sent without Content-Length is cut off at the limit."""
        monkeypatch.setattr(settings, "max_image_bytes", 16)

        async def chunks() -> AsyncIterator[bytes]:
            for _ in range(4):
                yield PNG

        response = await editor.put("/api/v1/profile-editor/avatar", content=chunks())

        assert response.status_code == 400
        assert "exceeds 16 bytes" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_stage_non_image_rejected(self, editor: AsyncClient) -> None:
        response = await editor.put(
            "/api/v1/profile-editor/avatar",
            content=b"<html><script>alert(1)</script></html>",
            headers={"Content-Type": "image/jpeg"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Unsupported image type"


class TestSave:
    @pytest.mark.asyncio
    async def test_save_persists_edits(
        self, editor: AsyncClient, profile_store: InMemoryProfileStore
    ) -> None:
        await editor.patch(
            "/api/v1/profile-editor/fields", json={"field": "about", "value": "Updated."}
        )

        response = await editor.post("/api/v1/profile-editor/save")

        assert response.status_code == 200
        assert response.json()["data"]["state"] == "editing"
        assert profile_store.profiles["maria_ds"].about == "Updated."

    @pytest.mark.asyncio
    async def test_save_uploads_avatar_first(
        self,
        editor: AsyncClient,
        profile_store: InMemoryProfileStore,
        media_gateway: InMemoryMediaGateway,
    ) -> None:
        staged = await editor.put(
            "/api/v1/profile-editor/avatar",
            content=PNG,
            headers={"Content-Type": "image/png"},
        )
        assert staged.json()["data"]["has_pending_image"] is True

        response = await editor.post("/api/v1/profile-editor/save")

        data = response.json()["data"]
        assert media_gateway.uploads == [PNG]
        assert data["has_pending_image"] is False
        assert data["profile"]["avatar"] == "https://storage.test/avatars/1.png"
        assert profile_store.profiles["maria_ds"].avatar == "https://storage.test/avatars/1.png"

    @pytest.mark.asyncio
    async def test_upload_failure_saves_nothing(
        self,
        editor: AsyncClient,
        profile_store: InMemoryProfileStore,
        media_gateway: InMemoryMediaGateway,
    ) -> None:
        media_gateway.fail_uploads = True
        await editor.patch(
            "/api/v1/profile-editor/fields", json={"field": "bio", "value": "Unsaved"}
        )
        await editor.put("/api/v1/profile-editor/avatar", content=PNG)

        response = await editor.post("/api/v1/profile-editor/save")

        assert response.status_code == 502
        assert response.json()["details"] == {"gateway": "media"}
        assert profile_store.save_calls == []
        state = (await editor.get("/api/v1/profile-editor")).json()["data"]
        assert state["profile"]["bio"] == "Unsaved"
        assert state["has_pending_image"] is True

    @pytest.mark.asyncio
    async def test_store_failure_keeps_working_copy(
        self, editor: AsyncClient, profile_store: InMemoryProfileStore
    ) -> None:
        profile_store.fail_saves = True
        await editor.patch(
            "/api/v1/profile-editor/fields", json={"field": "name", "value": "Maria S."}
        )

        response = await editor.post("/api/v1/profile-editor/save")

        assert response.status_code == 502
        assert profile_store.profiles["maria_ds"].name == "Maria Dos Santos"
        state = (await editor.get("/api/v1/profile-editor")).json()["data"]
        assert state["state"] == "editing"
        assert state["profile"]["name"] == "Maria S."
