"""Relational store for users and their books."""

import logging

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from .errors import Conflict
from .models import Book, User, db

log = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    # ---------------- USERS ---------------- #

    def create_user(self, username, password_hash):
        """Insert a user and return its id.

        Uniqueness is enforced by the ``users.username`` constraint; a
        violation rolls the session back and raises :class:`Conflict`.
        """
        user = User(username=username, password=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise Conflict("Username taken") from exc
        log.info("Created user id=%s username=%s", user.id, username)
        return user.id

    def find_user_by_username(self, username, fuzzy=False):
        if not username:
            return None
        if fuzzy:
            clause = func.lower(User.username) == username.lower()
        else:
            clause = User.username == username
        return self.session.execute(db.select(User).where(clause)).scalars().first()

    def find_user_by_id(self, user_id):
        if user_id is None:
            return None
        return self.session.get(User, user_id)

    def list_all_usernames(self, display=True):
        rows = self.session.execute(db.select(User.username).order_by(User.id)).scalars()
        if not display:
            return list(rows)
        # display only, the stored value keeps its case
        return [name.upper() for name in rows]

    # ---------------- BOOKS ---------------- #

    def add_book(self, owner_id, title, author, cover_url):
        book = Book(user_id=owner_id, title=title, author=author, cover_url=cover_url)
        self.session.add(book)
        self.session.commit()
        return book.id

    def list_books_by_owner(self, owner_id):
        stmt = db.select(Book).filter_by(user_id=owner_id).order_by(Book.id)
        return list(self.session.execute(stmt).scalars())

    def delete_books(self, owner_id, title, author):
        """Remove every book of ``owner_id`` matching title and author exactly."""
        stmt = db.delete(Book).where(
            Book.user_id == owner_id,
            Book.title == title,
            Book.author == author,
        )
        result = self.session.execute(stmt)
        self.session.commit()
        return result.rowcount or 0


def get_store():
    return current_app.extensions["bookshelf.store"]
