from unittest import mock

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from salesdesk.network.database import session as session_module
from salesdesk.network.database.session import DatabaseMode


def test_api_healthcheck(client: TestClient) -> None:
    response = client.get('/healthcheck/api')

    assert response.status_code == status.HTTP_200_OK
    assert 'SalesDesk' in response.text


def test_security_headers(client: TestClient) -> None:
    response = client.get('/healthcheck/api')

    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert response.headers['X-Frame-Options'] == 'DENY'


def test_database_healthcheck(client: TestClient) -> None:
    response = client.get('/healthcheck/database')

    assert response.status_code == status.HTTP_200_OK
    assert 'Regular DB is happy' in response.text
    assert 'Read-only DB is happy' in response.text


def test_replica_outage_only_fails_the_read_only_check(client: TestClient) -> None:
    unreachable = sessionmaker(bind=create_engine('sqlite:////nonexistent-dir/replica.db'))

    with mock.patch.dict(session_module._session_makers, {DatabaseMode.READ_ONLY: unreachable}):
        response = client.get('/healthcheck/database')

    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert 'Regular DB is happy' in response.text
    assert 'Read-only DB is sad' in response.text
