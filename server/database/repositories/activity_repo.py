"""Activity log repository."""
from asyncio import to_thread
from datetime import datetime, timezone
from supabase import Client
import logging

logger = logging.getLogger(__name__)


class ActivityRepository:
    """Append-only log of console activity."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def log_command(
        self,
        command: str,
        intent: str,
        username: str,
        success: bool,
    ) -> bool:
        """Record one AI command. Returns False instead of raising on failure."""
        try:
            now = datetime.now(timezone.utc).isoformat()
            data = {
                "action": intent,
                "name": command[:255],
                "type": "ai_command",
                "username": username,
                "status": "success" if success else "failed",
                "timestamp": now,
            }
            await to_thread(
                lambda: self.supabase.table("activities").insert(data).execute()
            )
            return True
        except Exception as e:
            logger.error(f"Error logging command activity: {e}", exc_info=True)
            return False
