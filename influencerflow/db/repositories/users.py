from typing import Optional

from sqlalchemy import select

from influencerflow.db.enums import UserRoleEnum
from influencerflow.db.models import User
from influencerflow.db.repositories.base import Repository


class UsersRepository(Repository):
    def get(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        stmt = select(User).where(User.external_id == external_id)
        return self.session.scalars(stmt).first()

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        return self.session.scalars(stmt).first()

    def create(self, external_id: str, **fields) -> User:
        return self.save(User(external_id=external_id, **fields))

    def set_role(self, user: User, role: UserRoleEnum) -> User:
        return self.apply(user, role=role)
