from __future__ import annotations

import asyncio

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pooply.config import APP_VERSION, settings
from pooply.db.base import get_supabase_admin_client

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "pooply-api",
            "version": APP_VERSION
        }
    )


@router.get("/ready")
async def readiness_check():
    """Readiness check endpoint."""
    db_status = "connected"
    try:
        client = get_supabase_admin_client()
        await asyncio.to_thread(
            lambda: client.table(settings.users_table).select("id").limit(1).execute()
        )
    except Exception as e:
        db_status = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "database": db_status,
            "api_prefix": settings.api_prefix
        }
    )
