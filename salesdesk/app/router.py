from fastapi import APIRouter

from salesdesk.app.accounts.router import router as accounts_router
from salesdesk.app.analytics.router import router as analytics_router
from salesdesk.app.leaderboard.router import router as leaderboard_router

# Create the root API router
api_router = APIRouter()

# Include domain routers
api_router.include_router(leaderboard_router, prefix='/leaderboard', tags=['leaderboard'])
api_router.include_router(analytics_router, prefix='/analytics', tags=['analytics'])
api_router.include_router(accounts_router, prefix='/accounts', tags=['accounts'])
