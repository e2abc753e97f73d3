"""Health check routes"""
from fastapi import APIRouter
from database.client import check_tables, get_supabase
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

# Tables every command handler reads from
REQUIRED_TABLES = ("students", "classes")


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": "schoolops-api"}


@router.get("/health/db")
async def database_health():
    """Report connectivity and whether the command tables exist."""
    try:
        supabase = get_supabase()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "error",
            "database": {"connected": False, "error": str(e)},
            "message": "Database connection failed. Check SUPABASE_URL and SUPABASE_KEY in .env",
        }

    tables = await check_tables(supabase, REQUIRED_TABLES)
    schema_ready = all(tables.values())
    missing = [name for name, ok in tables.items() if not ok]

    return {
        "status": "ok" if schema_ready else "degraded",
        "database": {
            "connected": True,
            "schema_ready": schema_ready,
            "tables": tables,
        },
        "message": "Database schema ready" if schema_ready
        else f"Required tables not found: {', '.join(missing)}",
    }
