"""Task repository for database operations."""
from asyncio import to_thread
from typing import Optional
from supabase import Client
import logging

logger = logging.getLogger(__name__)


class TaskRepository:
    """Handle staff task database operations."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
    ) -> Optional[dict]:
        """Create a pending task."""
        try:
            data = {
                "ten_viec": title,
                "dien_giai": description,
                "doi_tuong": target_type,
                "doi_tuong_id": target_id,
                "trang_thai": "pending",
            }
            response = await to_thread(
                lambda: self.supabase.table("tasks").insert(data).execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error creating task: {e}")
            raise
