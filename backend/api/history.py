from fastapi import APIRouter, Depends, Query, status

from core.auth import get_current_user
from core.errors import NotFoundError, StorageError
from core.supabase import get_supabase_for_token
from models.edit_history import (
    CreateHistoryPayload,
    HistoryItemResponse,
    HistoryListResponse,
    RecentPromptsResponse,
)
from models.user import CurrentUser, ProfileResponse
from services.history_service import HistoryService

router = APIRouter(tags=["history"])


def get_history_service(user: CurrentUser = Depends(get_current_user)) -> HistoryService:
    return HistoryService(get_supabase_for_token(user.access_token))


@router.get("/history", response_model=HistoryListResponse)
async def list_history(
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user: CurrentUser = Depends(get_current_user),
    history_service: HistoryService = Depends(get_history_service),
):
    """List the caller's edits, newest first"""
    success, items, total_count, error = await history_service.list_history(user.id, limit, offset)
    if not success:
        raise StorageError(error)
    return HistoryListResponse(success=True, items=items, total_count=total_count)


@router.get("/history/recent", response_model=RecentPromptsResponse)
async def recent_prompts(
    limit: int = Query(default=20, ge=1, le=50),
    user: CurrentUser = Depends(get_current_user),
    history_service: HistoryService = Depends(get_history_service),
):
    """Prompts of the caller's latest edits"""
    success, prompts, error = await history_service.recent_prompts(user.id, limit)
    if not success:
        raise StorageError(error)
    return RecentPromptsResponse(success=True, prompts=prompts)


@router.post("/history", response_model=HistoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_history(
    payload: CreateHistoryPayload,
    user: CurrentUser = Depends(get_current_user),
    history_service: HistoryService = Depends(get_history_service),
):
    """Record a finished edit for the caller"""
    success, item, error = await history_service.create_entry(user.id, payload)
    if not success:
        raise StorageError(error)
    return HistoryItemResponse(success=True, item=item)


@router.delete("/history/{entry_id}")
async def delete_history(
    entry_id: str,
    user: CurrentUser = Depends(get_current_user),
    history_service: HistoryService = Depends(get_history_service),
):
    """Delete one of the caller's history items"""
    success, found, error = await history_service.delete_entry(user.id, entry_id)
    if not success:
        raise StorageError(error)
    if not found:
        raise NotFoundError("History item not found")
    return {"success": True, "message": "History item removed"}


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: CurrentUser = Depends(get_current_user),
    history_service: HistoryService = Depends(get_history_service),
):
    """The caller's profile"""
    success, profile, error = await history_service.get_profile(user.id)
    if not success:
        raise StorageError(error)
    if profile is None:
        raise NotFoundError("Profile not found")
    return ProfileResponse(success=True, profile=profile)
