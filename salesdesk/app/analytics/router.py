from fastapi import APIRouter, Depends, Query

from salesdesk.app.accounts.domains import AccountAnalytics
from salesdesk.app.accounts.service import AccountAggregator
from salesdesk.app.demos.domains import DemosBySize
from salesdesk.app.demos.service import DemoAggregator
from salesdesk.common.date_range import parse_date_bounds
from salesdesk.common.domain import DataResponse
from salesdesk.core.authentication import CurrentIdentity, get_current_identity
from salesdesk.core.authorization.scope import resolve_visibility_scope
from salesdesk.network.database.decorator import read_only_route

router = APIRouter()


@read_only_route
@router.get('/accounts', response_model=DataResponse[AccountAnalytics])
def get_account_analytics(
    from_: str | None = Query(None, alias='from'),
    to: str | None = None,
    user_ids: str | None = Query(None, alias='userIds'),
    user_id: str | None = Query(None, alias='userId'),
    identity: CurrentIdentity = Depends(get_current_identity),
) -> DataResponse[AccountAnalytics]:
    """Created, modified, booked and lost account counts for the caller's scope."""
    bounds = parse_date_bounds(from_, to).validate_span()
    scope = resolve_visibility_scope(identity, user_ids=user_ids, user_id=user_id)

    return DataResponse(data=AccountAggregator.factory().get_account_analytics(scope=scope, bounds=bounds))


@read_only_route
@router.get('/demos-by-size', response_model=DataResponse[DemosBySize])
def get_demos_by_size(
    from_: str | None = Query(None, alias='from'),
    to: str | None = None,
    user_ids: str | None = Query(None, alias='userIds'),
    user_id: str | None = Query(None, alias='userId'),
    identity: CurrentIdentity = Depends(get_current_identity),
) -> DataResponse[DemosBySize]:
    """Scheduled and completed demos bucketed by the account's headcount."""
    bounds = parse_date_bounds(from_, to).validate_span()
    scope = resolve_visibility_scope(identity, user_ids=user_ids, user_id=user_id)

    return DataResponse(data=DemoAggregator.factory().get_demos_by_size(scope=scope, bounds=bounds))
