"""
API v1 router aggregating all endpoints.
"""
from fastapi import APIRouter

from app.api.v1.sites import router as sites_router

api_router = APIRouter()

api_router.include_router(sites_router)
