"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from pathlib import Path

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("APP_ENV", "test")

import pytest
from httpx import ASGITransport, AsyncClient

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.profile import (
    Contact,
    Education,
    Experience,
    Profile,
    ProfileStatus,
    Project,
)
from domain.entities.user import AuthUser
from infrastructure.auth.token_verifier import TokenVerifier
from tests.fakes import InMemoryAuthGateway, InMemoryMediaGateway, InMemoryProfileStore

TEST_USER_ID = "test-user-uid"


@pytest.fixture
def test_user() -> AuthUser:
    """Create a test user with fixed ID."""
    return AuthUser(id=TEST_USER_ID, email="maria_ds@gmail.com", display_name="Maria")


@pytest.fixture
def sample_profile() -> Profile:
    """A populated profile owned by the test user."""
    return Profile(
        id=TEST_USER_ID,
        username="maria_ds",
        name="Maria Dos Santos",
        status=ProfileStatus.VISITOR,
        avatar="https://randomuser.me/api/portraits/women/50.jpg",
        resume="https://www.hloom.com/sample.pdf",
        bio="Passionate UX/UI designer.",
        role="Lead Designer",
        about="Five years of experience in UX/UI for mobile applications.",
        education={
            "0": Education(
                degree="Bachelor of Design",
                institution="University of Sao Paulo",
                year="2019",
            )
        },
        experience={
            "0": Experience(
                title="Lead UX/UI Designer",
                company="TechWave",
                period="2019 - 2024",
                description="Designing and prototyping mobile and web applications.",
            )
        },
        projects={
            "0": Project(
                title="Mobile Banking App",
                description="Designing a user-friendly mobile banking experience.",
            )
        },
        contact=Contact(
            email="maria_ds@gmail.com",
            phone="0025612345678",
            linkedin="https://www.linkedin.com/in/maria-dos-santos",
            github="https://github.com/maria-dos-santos",
        ),
        created_at=datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def token_verifier() -> TokenVerifier:
    """Create a verifier for locally signed test tokens."""
    return TokenVerifier(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
        project_id="portfolio-test",
        allow_local_tokens=True,
    )


@pytest.fixture
def auth_token(token_verifier: TokenVerifier, test_user: AuthUser) -> str:
    """Create auth token for test user."""
    return token_verifier.create_token(test_user)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


@pytest.fixture
def media_gateway() -> InMemoryMediaGateway:
    return InMemoryMediaGateway()


@pytest.fixture
def auth_gateway(token_verifier: TokenVerifier) -> InMemoryAuthGateway:
    return InMemoryAuthGateway(verifier=token_verifier)


@pytest.fixture
async def client(
    profile_store: InMemoryProfileStore,
    media_gateway: InMemoryMediaGateway,
    auth_gateway: InMemoryAuthGateway,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to in-memory gateways.

    Requests are unauthenticated unless the test passes ``auth_headers``.
    """
    from api.dependencies.auth import get_auth_gateway
    from api.v1.dependencies import (
        get_edit_session_manager,
        get_profile_service,
        get_profile_store,
    )
    from domain.services.edit_session import EditSessionManager
    from domain.services.profile_service import ProfileService
    from main import create_app

    app = create_app()

    manager = EditSessionManager(profile_store, media_gateway)

    app.dependency_overrides[get_auth_gateway] = lambda: auth_gateway
    app.dependency_overrides[get_profile_store] = lambda: profile_store
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(profile_store)
    app.dependency_overrides[get_edit_session_manager] = lambda: manager

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    client: AsyncClient, auth_headers: dict[str, str]
) -> AsyncClient:
    """Test client sending the test user's bearer token."""
    client.headers.update(auth_headers)
    return client
