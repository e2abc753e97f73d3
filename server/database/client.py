"""Supabase database client"""
from asyncio import to_thread
from typing import Iterable, Optional
from supabase import create_client, Client
from config.settings import settings
import logging

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None


def init_supabase() -> Client:
    """Create the process-wide client on first use; later calls reuse it."""
    global _supabase_client

    if _supabase_client is None:
        logger.info(f"Connecting to Supabase at {settings.SUPABASE_URL}")
        _supabase_client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)

    return _supabase_client


def get_supabase() -> Client:
    return _supabase_client if _supabase_client is not None else init_supabase()


async def check_tables(supabase: Client, tables: Iterable[str]) -> dict[str, bool]:
    """Probe each table with a one-row select. Missing tables map to False."""
    status: dict[str, bool] = {}
    for table in tables:
        try:
            await to_thread(
                lambda: supabase.table(table).select("id").limit(1).execute()
            )
            status[table] = True
        except Exception as e:
            logger.error(f"{table} table error: {e}")
            status[table] = False
    return status
