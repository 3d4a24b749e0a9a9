from fastapi import APIRouter, Depends, Query

from salesdesk.app.accounts.domains import DashboardSummary
from salesdesk.app.accounts.service import get_dashboard_summary
from salesdesk.common.domain import DataResponse
from salesdesk.core.authentication import CurrentIdentity, get_current_identity
from salesdesk.core.authorization.scope import resolve_dashboard_scope
from salesdesk.network.database.decorator import read_only_route

router = APIRouter()


@read_only_route
@router.get('/dashboard-summary', response_model=DataResponse[DashboardSummary])
def get_accounts_dashboard_summary(
    user_ids: str | None = Query(None, alias='userIds'),
    identity: CurrentIdentity = Depends(get_current_identity),
) -> DataResponse[DashboardSummary]:
    """Lifetime account and demo totals for the dashboard cards."""
    scope = resolve_dashboard_scope(identity, user_ids=user_ids)
    return DataResponse(data=get_dashboard_summary(scope))
