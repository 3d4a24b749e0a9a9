from fastapi import APIRouter, Response
from loguru import logger
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette import status

router = APIRouter()


@router.get('/api')
def status_get(response: Response) -> str:
    """
    Liveness check for load balancers and deploy scripts, never touches the database
    """
    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    return '📈 SalesDesk is counting demos... 📈'


def _check_connection(label: str, session: Session) -> tuple[bool, str]:
    try:
        session.execute(text('SELECT 1'))
    except Exception as e:
        logger.warning(f'{label} healthcheck failed: {e}')
        return False, f'❌ {label} is sad: {e}'
    return True, f'✅ {label} is happy'


@router.get('/database')
def database_health_check(response: Response) -> str:
    """
    Readiness check: the primary through the request session and the replica
    through a session of its own
    """
    from salesdesk.network.database.session import ReadOnlySession, db

    # ReadOnlySession swaps db.session for its own until it exits
    results = [_check_connection('Regular DB', db.session)]
    with ReadOnlySession() as ro_session:
        results.append(_check_connection('Read-only DB', ro_session))

    response.headers['Content-Type'] = 'text/html; charset=utf-8'
    is_healthy = all(ok for ok, _ in results)
    response.status_code = status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return '<br>'.join(line for _, line in results)
