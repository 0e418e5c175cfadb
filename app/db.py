import logging
import os
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, String, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.schemas.results import DeleteResult, InsertResult, UpdateResult


logger = logging.getLogger(__name__)

Base = declarative_base()


def generate_id() -> str:
    return uuid.uuid4().hex


def get_path(document: Dict[str, Any], path: str) -> Any:
    """Resolve a dotted path such as ``host.email`` inside a document."""
    value: Any = document
    for key in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def set_path(document: Dict[str, Any], path: str, value: Any) -> None:
    keys = path.split(".")
    target = document
    for key in keys[:-1]:
        target = target.setdefault(key, {})
    target[keys[-1]] = value


class DocumentMixin:
    """
    Row layout shared by every collection.

    The whole document lives in ``data``; the columns named in ``__lookups__``
    are projections of dotted document paths kept in sync on every write so
    equality queries on them run in SQL.
    """

    __lookups__: Dict[str, str] = {}

    id = Column(String(32), primary_key=True, default=generate_id)
    data = Column(JSON, nullable=False, default=dict)

    def apply(self, document: Dict[str, Any]) -> None:
        self.data = document
        for path, attr in self.__lookups__.items():
            setattr(self, attr, get_path(document, path))

    def to_document(self) -> Dict[str, Any]:
        return {"_id": self.id, **self.data}


class Collection:
    """
    Document-style access to one table.

    Queries are dicts of equality conditions keyed by ``_id`` or a dotted
    document path. Every write commits on its own.
    """

    def __init__(self, session: Session, model):
        self.session = session
        self.model = model

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _select(self, query: Optional[Dict[str, Any]]) -> List[DocumentMixin]:
        statement = self.session.query(self.model)
        remaining = {}
        for path, value in (query or {}).items():
            if path == "_id":
                statement = statement.filter(self.model.id == value)
            elif path in self.model.__lookups__:
                column = getattr(self.model, self.model.__lookups__[path])
                statement = statement.filter(column == value)
            else:
                remaining[path] = value
        rows = statement.all()
        return [
            row for row in rows
            if all(get_path(row.data, path) == value for path, value in remaining.items())
        ]

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        rows = self._select(query)
        return rows[0].to_document() if rows else None

    def find_many(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return [row.to_document() for row in self._select(query)]

    def insert_one(self, document: Dict[str, Any], *, _document_id: Optional[str] = None) -> InsertResult:
        """Store ``document`` under a freshly generated id; a client ``_id`` is dropped."""
        document = {key: value for key, value in document.items() if key != "_id"}
        row = self.model(id=_document_id or generate_id())
        row.apply(document)
        self.session.add(row)
        self._commit()
        logger.debug(f"Inserted {self.name} document: {row.id}")
        return InsertResult(inserted_id=row.id)

    def update_one(self, query: Dict[str, Any], patch: Dict[str, Any], upsert: bool = False) -> UpdateResult:
        """Apply ``$set``-style ``patch`` to the first match, or insert when ``upsert``."""
        patch = {key: value for key, value in patch.items() if key != "_id"}
        rows = self._select(query)
        if rows:
            row = rows[0]
            merged = {**row.data, **patch}
            modified = merged != row.data
            if modified:
                row.apply(merged)
                self._commit()
            logger.debug(f"Updated {self.name} document: {row.id}, modified: {modified}")
            return UpdateResult(matched_count=1, modified_count=int(modified))

        if not upsert:
            logger.debug(f"No {self.name} document matched {query}")
            return UpdateResult(matched_count=0, modified_count=0)

        document: Dict[str, Any] = {}
        for path, value in query.items():
            if path != "_id":
                set_path(document, path, value)
        document.update(patch)
        inserted = self.insert_one(document, _document_id=query.get("_id"))
        return UpdateResult(
            matched_count=0,
            modified_count=0,
            upserted_id=inserted.inserted_id,
            upserted_count=1,
        )

    def delete_one(self, query: Dict[str, Any]) -> DeleteResult:
        rows = self._select(query)
        if not rows:
            return DeleteResult(deleted_count=0)
        row_id = rows[0].id
        self.session.delete(rows[0])
        self._commit()
        logger.debug(f"Deleted {self.name} document: {row_id}")
        return DeleteResult(deleted_count=1)


class Database:
    """Owns the engine and session factory for one database URL."""

    def __init__(self, url: str):
        self.url = url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine = create_engine(url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def init(self) -> None:
        url = make_url(self.url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            directory = os.path.dirname(url.database)
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()
