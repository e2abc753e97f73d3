"""Class and enrollment repository for database operations."""
from asyncio import to_thread
from typing import Optional
from supabase import Client
import logging

logger = logging.getLogger(__name__)


class ClassRepository:
    """Handle class and enrollment database operations."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def find_by_name(self, name: str) -> Optional[dict]:
        """Match the short name first, then the full name."""
        try:
            for column in ("ten_lop", "ten_lop_full"):
                response = await to_thread(
                    lambda: self.supabase.table("classes")
                    .select("*")
                    .ilike(column, f"%{name}%")
                    .limit(1)
                    .execute()
                )
                if response.data:
                    return response.data[0]
            return None
        except Exception as e:
            logger.error(f"Error finding class {name!r}: {e}")
            raise

    async def count_enrollments(self, class_id: str) -> int:
        try:
            response = await to_thread(
                lambda: self.supabase.table("enrollments")
                .select("id", count="exact")
                .eq("lop_chi_tiet_id", class_id)
                .execute()
            )
            if response.count is not None:
                return response.count
            return len(response.data or [])
        except Exception as e:
            logger.error(f"Error counting enrollments for class {class_id}: {e}")
            raise

    async def enroll_student(self, student_id: str, class_id: str) -> Optional[dict]:
        try:
            data = {
                "hoc_sinh_id": student_id,
                "lop_chi_tiet_id": class_id,
            }
            response = await to_thread(
                lambda: self.supabase.table("enrollments").insert(data).execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error enrolling student {student_id} in class {class_id}: {e}")
            raise
