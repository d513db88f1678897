"""Profile editor API routes.

The editor keeps a working copy of the caller's profile between requests.
Edits change only the working copy; nothing is persisted until ``/save``.
"""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_edit_session_manager
from api.v1.schemas.profile import (
    EditorResponse,
    EditorState,
    EducationSchema,
    EntryCreatedResponse,
    ExperienceSchema,
    FieldUpdate,
    ProjectSchema,
)
from core.config import settings
from core.exceptions import ValidationError
from core.rate_limit import limiter
from domain.services.edit_session import EditSessionManager
from infrastructure.firebase.storage_media_gateway import sniff_image_type

router = APIRouter(prefix="/profile-editor", tags=["profile-editor"])


async def _read_image(request: Request, max_bytes: int) -> bytes:
    """Read the request body, stopping as soon as it exceeds ``max_bytes``."""
    too_large = ValidationError(f"Image exceeds {max_bytes} bytes", field="avatar")
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise too_large

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise too_large
    return bytes(body)


@router.post(
    "",
    response_model=EditorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open an edit session",
    responses={404: {"description": "Profile not set up yet"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def open_editor(
    request: Request,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    """Load the caller's profile into a fresh working copy, discarding any previous one."""
    session = await manager.open(user.id)
    return EditorResponse(data=EditorState.from_session(session))


@router.get(
    "",
    response_model=EditorResponse,
    summary="Get the working copy",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def get_editor(
    request: Request,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    return EditorResponse(data=EditorState.from_session(manager.get(user.id)))


@router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Discard the working copy",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def close_editor(
    request: Request,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> None:
    manager.close(user.id)
    return None


@router.patch(
    "/fields",
    response_model=EditorResponse,
    summary="Change a profile or contact field",
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def update_field(
    request: Request,
    body: FieldUpdate,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    session = manager.get(user.id)
    session.set_field(body.field, body.value)
    return EditorResponse(data=EditorState.from_session(session))


@router.post(
    "/education",
    response_model=EntryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an education entry",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationSchema,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EntryCreatedResponse:
    session = manager.get(user.id)
    key = session.add_education(body.to_entity())
    return EntryCreatedResponse(key=key, data=EditorState.from_session(session))


@router.put(
    "/education/{key}",
    response_model=EditorResponse,
    summary="Replace an education entry",
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def update_education(
    request: Request,
    key: str,
    body: EducationSchema,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    """Replace the entry at ``key``. An unknown key creates the entry."""
    session = manager.get(user.id)
    session.update_education(key, body.to_entity())
    return EditorResponse(data=EditorState.from_session(session))


@router.post(
    "/experience",
    response_model=EntryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an experience entry",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceSchema,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EntryCreatedResponse:
    session = manager.get(user.id)
    key = session.add_experience(body.to_entity())
    return EntryCreatedResponse(key=key, data=EditorState.from_session(session))


@router.put(
    "/experience/{key}",
    response_model=EditorResponse,
    summary="Replace an experience entry",
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def update_experience(
    request: Request,
    key: str,
    body: ExperienceSchema,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    """Replace the entry at ``key``. An unknown key creates the entry."""
    session = manager.get(user.id)
    session.update_experience(key, body.to_entity())
    return EditorResponse(data=EditorState.from_session(session))


@router.post(
    "/projects",
    response_model=EntryCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a project",
)
@limiter.limit("60/minute")  # type: ignore[untyped-decorator]
async def add_project(
    request: Request,
    body: ProjectSchema,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EntryCreatedResponse:
    session = manager.get(user.id)
    key = session.add_project(body.to_entity())
    return EntryCreatedResponse(key=key, data=EditorState.from_session(session))


@router.put(
    "/projects/{key}",
    response_model=EditorResponse,
    summary="Replace a project",
)
@limiter.limit("120/minute")  # type: ignore[untyped-decorator]
async def update_project(
    request: Request,
    key: str,
    body: ProjectSchema,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    """Replace the project at ``key``. An unknown key creates the project."""
    session = manager.get(user.id)
    session.update_project(key, body.to_entity())
    return EditorResponse(data=EditorState.from_session(session))


@router.put(
    "/avatar",
    response_model=EditorResponse,
    summary="Stage a new avatar image",
    openapi_extra={
        "requestBody": {
            "content": {"image/*": {"schema": {"type": "string", "format": "binary"}}},
            "required": True,
        }
    },
)
@limiter.limit("20/minute")  # type: ignore[untyped-decorator]
async def stage_avatar(
    request: Request,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    """Send the raw image bytes as the request body. The image is uploaded on save."""
    session = manager.get(user.id)
    data = await _read_image(request, settings.max_image_bytes)
    if data:
        sniff_image_type(data)
    session.select_image(data, max_bytes=settings.max_image_bytes)
    return EditorResponse(data=EditorState.from_session(session))


@router.post(
    "/save",
    response_model=EditorResponse,
    summary="Persist the working copy",
    responses={
        409: {"description": "A save is already in progress"},
        502: {"description": "Upload or store failed; the working copy is kept"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def save_editor(
    request: Request,
    user: CurrentUser,
    manager: EditSessionManager = Depends(get_edit_session_manager),
) -> EditorResponse:
    """Upload a staged avatar (if any), then save the profile."""
    session = manager.get(user.id)
    await session.save()
    return EditorResponse(data=EditorState.from_session(session))
