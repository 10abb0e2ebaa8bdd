"""Repository for the User aggregate."""

from protean.exceptions import ObjectNotFoundError

from commerce.account.user import User
from commerce.domain import commerce
from shared.errors import NotFoundError


@commerce.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def find_by_id(self, user_id) -> User | None:
        return self._dao.query.filter(id=str(user_id)).all().first

    def get_user(self, user_id: str) -> User:
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            raise NotFoundError("User not found") from None

    def matching(self, *criteria, **filters):
        return self._dao.query.filter(*criteria, **filters)

    def delete_user(self, user: User) -> None:
        self._dao.delete(user)
