import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from ..errors import Conflict, NotFound
from ..extensions import db
from ..models import User
from ..utils.pagination import Page, paginate

logger = logging.getLogger("reservation_api.users")


def contains_ci(column, term: str):
    return column.icontains(term, autoescape=True)


class UserDirectory:
    """Looks up, creates and maintains user records keyed by unique email."""

    def find_by_email(self, email: str) -> User | None:
        return User.query.filter_by(email=email).one_or_none()

    def check_exists(self, email: str) -> User:
        user = self.find_by_email(email)
        if user is None:
            raise NotFound(f"User not found with email: {email}")
        return user

    def get(self, user_id: int) -> User:
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFound(f"User not found with ID: {user_id}")
        return user

    def search(self, term: str | None = None, page: int | None = None, page_size: int | None = None) -> Page:
        q = User.query
        if term and term.strip():
            term = term.strip()
            q = q.filter(or_(
                contains_ci(User.name, term),
                contains_ci(User.surname, term),
                contains_ci(User.email, term),
            ))
        return paginate(q.order_by(User.id.asc()), page, page_size)

    def create(self, email: str, name: str, surname: str) -> User:
        if self.find_by_email(email) is not None:
            raise Conflict("User already exists")

        user = User(email=email, name=name, surname=surname)
        db.session.add(user)
        self._commit("A user with the provided email already exists.")
        logger.info("Created user %s", user.id)
        return user

    def update(self, user_id: int, name: str, surname: str, email: str) -> User:
        user = self.get(user_id)
        user.name = name
        user.surname = surname
        user.email = email
        self._commit("A user with the provided email already exists.")
        return user

    def delete(self, user_id: int) -> None:
        user = self.get(user_id)
        db.session.delete(user)
        db.session.commit()
        logger.info("Deleted user %s", user_id)

    @staticmethod
    def _commit(conflict_message: str) -> None:
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            logger.warning("Unique constraint rejected user write")
            raise Conflict(conflict_message)
