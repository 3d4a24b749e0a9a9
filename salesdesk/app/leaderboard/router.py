from fastapi import APIRouter, Depends

from salesdesk.app.leaderboard.domains import LeaderboardResponse
from salesdesk.app.leaderboard.service import LeaderboardEngine
from salesdesk.common.domain import DataResponse
from salesdesk.core.authentication import CurrentIdentity, get_current_identity
from salesdesk.network.database.decorator import read_only_route

router = APIRouter()


@read_only_route
@router.get('', response_model=DataResponse[LeaderboardResponse])
def get_leaderboard(
    period: str | None = None,
    identity: CurrentIdentity = Depends(get_current_identity),
) -> DataResponse[LeaderboardResponse]:
    """Team ranking for the current week, month or quarter."""
    return DataResponse(data=LeaderboardEngine.get_leaderboard(period))
