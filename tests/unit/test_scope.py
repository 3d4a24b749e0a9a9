import uuid

import pytest

from salesdesk.core.authentication import CurrentIdentity
from salesdesk.core.authorization.constants import Role
from salesdesk.core.authorization.scope import (
    parse_user_ids,
    resolve_dashboard_scope,
    resolve_visibility_scope,
)

CALLER_ID = str(uuid.uuid4())
OTHER_ID = str(uuid.uuid4())
THIRD_ID = str(uuid.uuid4())


def _identity(role: Role | str) -> CurrentIdentity:
    return CurrentIdentity(user_id=CALLER_ID, role=Role.parse(role))


@pytest.mark.parametrize('raw', ['Admin', 'admin', 'ADMIN', ' aDmIn '])
def test_role_parse_admin_any_case(raw):
    assert Role.parse(raw) == Role.ADMIN


@pytest.mark.parametrize('raw', ['Basic', 'basic', None, '', 'superuser'])
def test_role_parse_defaults_to_basic(raw):
    assert Role.parse(raw) == Role.BASIC


def test_basic_user_only_sees_themselves():
    scope = resolve_visibility_scope(_identity('Basic'))

    assert scope == frozenset([CALLER_ID])


def test_basic_user_filters_are_ignored():
    scope = resolve_visibility_scope(_identity('Basic'), user_ids=f'{OTHER_ID},{THIRD_ID}', user_id=OTHER_ID)

    assert scope == frozenset([CALLER_ID])


def test_admin_without_filters_is_unrestricted():
    assert resolve_visibility_scope(_identity('Admin')) is None


def test_admin_user_ids_are_parsed_and_deduplicated():
    scope = resolve_visibility_scope(
        _identity('admin'),
        user_ids=f' {OTHER_ID} ,{THIRD_ID},{OTHER_ID.upper()}',
    )

    assert scope == frozenset([OTHER_ID, THIRD_ID])


def test_admin_invalid_user_ids_are_dropped():
    scope = resolve_visibility_scope(_identity('Admin'), user_ids=f'not-a-uuid,{OTHER_ID},,123')

    assert scope == frozenset([OTHER_ID])


def test_admin_only_invalid_user_ids_is_unrestricted():
    assert resolve_visibility_scope(_identity('Admin'), user_ids='nope,also-nope') is None


def test_admin_user_ids_take_precedence_over_user_id():
    scope = resolve_visibility_scope(_identity('Admin'), user_ids=THIRD_ID, user_id=OTHER_ID)

    assert scope == frozenset([THIRD_ID])


def test_admin_single_user_id():
    scope = resolve_visibility_scope(_identity('Admin'), user_ids='  ', user_id=OTHER_ID)

    assert scope == frozenset([OTHER_ID])


def test_admin_invalid_single_user_id_is_unrestricted():
    assert resolve_visibility_scope(_identity('Admin'), user_id='bogus') is None


def test_parse_user_ids_keeps_order():
    assert parse_user_ids(f'{THIRD_ID},{OTHER_ID},{THIRD_ID}') == [THIRD_ID, OTHER_ID]


def test_dashboard_scope_basic_user_is_unrestricted():
    assert resolve_dashboard_scope(_identity('Basic'), user_ids=OTHER_ID) is None


def test_dashboard_scope_admin_can_narrow():
    assert resolve_dashboard_scope(_identity('Admin'), user_ids=f'{OTHER_ID},junk') == frozenset([OTHER_ID])
    assert resolve_dashboard_scope(_identity('Admin')) is None
