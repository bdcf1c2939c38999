"""SQLAlchemy-backed repository for contact form submissions."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from article_block_store.db.schema import DbContact
from article_block_store.models.article import Contact

from .block_repository import RepositoryError


class ContactNotFoundError(RepositoryError):
    """Raised when a contact submission does not exist."""


class ContactRepository:
    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def add_contact(self, name: str, email: str, message: str) -> Contact:
        record = DbContact(
            id=str(uuid4()),
            name=name,
            email=email,
            message=message,
            read=False,
            created_at=datetime.now(timezone.utc),
        )
        with self._session_factory() as session:
            session.add(record)
            session.commit()
            return self._to_model(record)

    def list_contacts(self) -> list[Contact]:
        """Return submissions newest first."""
        query = select(DbContact).order_by(DbContact.created_at.desc(), DbContact.id)
        with self._session_factory() as session:
            return [self._to_model(record) for record in session.scalars(query).all()]

    def set_read(self, contact_id: UUID, read: bool) -> Contact:
        with self._session_factory() as session:
            record = session.get(DbContact, str(contact_id))
            if record is None:
                raise ContactNotFoundError(f"Contact {contact_id} does not exist.")
            record.read = read
            session.commit()
            return self._to_model(record)

    @staticmethod
    def _to_model(record: DbContact) -> Contact:
        return Contact(
            id=UUID(record.id),
            name=record.name,
            email=record.email,
            message=record.message,
            read=record.read,
            created_at=record.created_at,
        )


__all__ = ["ContactNotFoundError", "ContactRepository"]
