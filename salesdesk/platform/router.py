from fastapi import APIRouter

from salesdesk.platform.healthcheck import router as healthcheck

api_router = APIRouter()
api_router.include_router(healthcheck.router, prefix='/healthcheck', tags=['healthcheck'])
