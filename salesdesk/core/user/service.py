from salesdesk.core.user.domains import UserCreate, UserRead
from salesdesk.core.user.models import User


class UserService:
    @classmethod
    def factory(cls) -> 'UserService':
        return cls()

    def create_user(self, user: UserCreate) -> UserRead:
        return User.create(user)

    def list_active_users(self) -> list[UserRead]:
        """
        Users that can appear on rankings: active and not soft deleted
        """
        return User.list(User.is_active == True, User.is_deleted == False, ordering=['id'])  # noqa: E712
