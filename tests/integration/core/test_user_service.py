import pydantic
import pytest

from salesdesk.core.user import UserCreate, UserService


def test_factory_users_pass_email_validation(user_factory):
    created = UserService.factory().create_user(user_factory.build(display_name='  Sam Seller  '))

    assert created.email.endswith('@example.com')
    assert created.display_name == 'Sam Seller'


def test_malformed_email_is_rejected():
    with pytest.raises(pydantic.ValidationError):
        UserCreate(email='not-an-email')


def test_list_active_users_hides_inactive_and_deleted(user_factory):
    service = UserService.factory()
    active = service.create_user(user_factory.build())
    service.create_user(user_factory.build(is_active=False))
    service.create_user(user_factory.build(is_deleted=True))

    assert [user.id for user in service.list_active_users()] == [active.id]
