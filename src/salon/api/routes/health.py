"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check that Supabase is configured and the salons table answers."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "connected": False,
            "message": "Supabase not configured. Set SALON_SUPABASE_URL and SALON_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table("salons").select("id", count="exact").limit(1).execute()
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {"configured": True, "connected": True, "message": "Database connected."}
