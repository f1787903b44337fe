from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class HistoryItem(BaseModel):
    id: str
    user_id: Optional[str] = None
    prompt: str
    image_url: Optional[str] = None
    edited_image_url: Optional[str] = None
    created_at: datetime


class RecentPrompt(BaseModel):
    id: str
    prompt: str
    created_at: datetime


class CreateHistoryPayload(BaseModel):
    prompt: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    edited_image_url: str


class HistoryItemResponse(BaseModel):
    success: bool
    item: Optional[HistoryItem] = None
    error: Optional[str] = None


class HistoryListResponse(BaseModel):
    success: bool
    items: List[HistoryItem] = []
    total_count: int = 0
    error: Optional[str] = None


class RecentPromptsResponse(BaseModel):
    success: bool
    prompts: List[RecentPrompt] = []
    error: Optional[str] = None
