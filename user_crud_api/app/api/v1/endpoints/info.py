"""
Service information endpoint.

Returns the name and version of the running API.  Clients and load
balancers use it as a cheap liveness check; it does not touch the
database.
"""

from typing import Dict

from fastapi import APIRouter

from user_crud_api.app.core.config import settings

router = APIRouter()


@router.get("/", response_model=Dict[str, str])
async def get_info() -> Dict[str, str]:
    return {"name": settings.project_name, "version": settings.api_version}
