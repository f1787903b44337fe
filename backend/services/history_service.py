import logging
from typing import List, Tuple, Optional

from supabase import Client

from core import cache
from models.edit_history import HistoryItem, RecentPrompt, CreateHistoryPayload
from models.user import Profile

logger = logging.getLogger(__name__)


class HistoryService:
    """Service for a user's rows in the edit_history and profiles tables.

    Every query filters on the owning user id, on top of whatever row-level
    security the client's token carries.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def list_history(self, user_id: str, limit: int = 50, offset: int = 0) -> Tuple[bool, List[HistoryItem], int, Optional[str]]:
        """
        Get the user's edit history, newest first.
        Returns: (success, items, total_count, error_message)
        """
        cache_key = cache.make_history_cache_key(user_id, limit, offset)
        cached = cache.get_cached(cache_key)
        if cached is not None:
            items, total_count = cached
            return True, items, total_count, None

        try:
            result = self.supabase.table("edit_history") \
                .select("*", count="exact") \
                .eq("user_id", user_id) \
                .order("created_at", desc=True) \
                .range(offset, offset + limit - 1) \
                .execute()

            items = [HistoryItem(**row) for row in (result.data or [])]
            total_count = result.count if result.count is not None else len(items)

            cache.set_cached(cache_key, (items, total_count))
            return True, items, total_count, None

        except Exception as e:
            logger.error("Failed to list history for %s: %s", user_id, e)
            return False, [], 0, str(e)

    async def recent_prompts(self, user_id: str, limit: int = 20) -> Tuple[bool, List[RecentPrompt], Optional[str]]:
        """Get the prompts of the user's latest edits."""
        try:
            result = self.supabase.table("edit_history") \
                .select("id, prompt, created_at") \
                .eq("user_id", user_id) \
                .order("created_at", desc=True) \
                .limit(limit) \
                .execute()

            return True, [RecentPrompt(**row) for row in (result.data or [])], None

        except Exception as e:
            logger.error("Failed to load recent prompts for %s: %s", user_id, e)
            return False, [], str(e)

    async def create_entry(self, user_id: str, payload: CreateHistoryPayload) -> Tuple[bool, Optional[HistoryItem], Optional[str]]:
        """Record a finished edit."""
        try:
            data = {
                "user_id": user_id,
                "prompt": payload.prompt,
                "image_url": payload.image_url,
                "edited_image_url": payload.edited_image_url,
            }
            result = self.supabase.table("edit_history").insert(data).execute()

            if not result.data:
                return False, None, "Failed to create history record"

            cache.invalidate_pattern(cache.user_cache_prefix(user_id))
            return True, HistoryItem(**result.data[0]), None

        except Exception as e:
            logger.error("Failed to create history for %s: %s", user_id, e)
            return False, None, str(e)

    async def delete_entry(self, user_id: str, entry_id: str) -> Tuple[bool, bool, Optional[str]]:
        """
        Delete one of the user's history rows.
        Returns: (success, found, error_message)
        """
        try:
            result = self.supabase.table("edit_history") \
                .delete() \
                .eq("id", entry_id) \
                .eq("user_id", user_id) \
                .execute()

            cache.invalidate_pattern(cache.user_cache_prefix(user_id))
            return True, bool(result.data), None

        except Exception as e:
            logger.error("Failed to delete history %s: %s", entry_id, e)
            return False, False, str(e)

    async def get_profile(self, user_id: str) -> Tuple[bool, Optional[Profile], Optional[str]]:
        """Get the user's profile row; (True, None, None) when there is none."""
        try:
            result = self.supabase.table("profiles") \
                .select("user_id, full_name, email, avatar_url, created_at") \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()

            if not result.data:
                return True, None, None
            return True, Profile(**result.data[0]), None

        except Exception as e:
            logger.error("Failed to load profile for %s: %s", user_id, e)
            return False, None, str(e)
