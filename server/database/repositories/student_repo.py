"""Student repository for database operations."""
from asyncio import to_thread
from typing import Optional
from supabase import Client
import logging

logger = logging.getLogger(__name__)

STUDENT_TABLE = "students"


class StudentRepository:
    """Handle student database operations."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def find_by_name(self, name: str) -> Optional[dict]:
        """First student whose name contains ``name`` (case-insensitive)."""
        try:
            response = await to_thread(
                lambda: self.supabase.table(STUDENT_TABLE)
                .select("*")
                .ilike("ten_hoc_sinh", f"%{name}%")
                .limit(1)
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error finding student {name!r}: {e}")
            raise

    async def create_student(
        self,
        name: str,
        parent_name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Optional[dict]:
        """Create a new active student."""
        try:
            data = {
                "ten_hoc_sinh": name,
                "ten_ph": parent_name,
                "sdt_ph1": phone,
                "email_ph1": email,
                "trang_thai": "active",
            }
            response = await to_thread(
                lambda: self.supabase.table(STUDENT_TABLE).insert(data).execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error creating student: {e}")
            raise

    async def update_student(self, student_id: str, updates: dict) -> list[dict]:
        """Apply ``updates`` and return the updated rows."""
        try:
            response = await to_thread(
                lambda: self.supabase.table(STUDENT_TABLE)
                .update(updates)
                .eq("id", student_id)
                .execute()
            )
            return response.data or []
        except Exception as e:
            logger.error(f"Error updating student {student_id}: {e}")
            raise
