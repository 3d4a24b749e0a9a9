from salesdesk.core.user.domains import UserCreate, UserRead
from salesdesk.core.user.models import User
from salesdesk.core.user.service import UserService

__all__ = [
    'User',
    'UserCreate',
    'UserRead',
    'UserService',
]
