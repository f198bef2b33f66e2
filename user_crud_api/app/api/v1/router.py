"""
Top-level router for version 1 of the API.

This router aggregates domain-specific routers under a unified
prefix.  When new endpoints are added or when new domains are
introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
