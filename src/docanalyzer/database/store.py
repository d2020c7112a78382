"""Persisted document collection stored as one JSON blob."""

import json
import threading
from typing import Callable

from ..errors import DocumentNotFoundError
from ..models import AnalyzedDocument
from ..utils.logging import get_logger
from .models import Database
from .schema import KeyValue

logger = get_logger(__name__)

DEFAULT_COLLECTION_KEY = "smart-analyzer-docs"


class DocumentStore:
    """
    The collection of analyzed documents.

    The whole collection is a JSON array under a single key. Every mutation
    reads the array, changes it and writes it back wholesale; mutations are
    serialized by a lock so concurrent callers cannot lose updates.
    """

    def __init__(self, db: Database, key: str = DEFAULT_COLLECTION_KEY):
        """
        Initialize the store.

        Args:
            db: Database holding the key-value table
            key: Key under which the collection is stored
        """
        self.db = db
        self.key = key
        self._lock = threading.Lock()
        self.db.create_all_tables()

    def _read(self) -> list[AnalyzedDocument]:
        session = self.db.get_session()
        try:
            row = session.get(KeyValue, self.key)
            if row is None:
                return []
            records = json.loads(row.value)
        finally:
            session.close()

        return [AnalyzedDocument.from_record(record) for record in records]

    def _write(self, documents: list[AnalyzedDocument]):
        payload = json.dumps([doc.to_record() for doc in documents], ensure_ascii=False)
        session = self.db.get_session()
        try:
            session.merge(KeyValue(key=self.key, value=payload))
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _mutate(self, change: Callable[[list[AnalyzedDocument]], list[AnalyzedDocument]]):
        with self._lock:
            documents = change(self._read())
            self._write(documents)

    def load(self) -> list[AnalyzedDocument]:
        """Return the whole collection, newest first."""
        with self._lock:
            return self._read()

    def save_all(self, documents: list[AnalyzedDocument]):
        """Replace the whole collection."""
        with self._lock:
            self._write(list(documents))

    def get(self, doc_id: str) -> AnalyzedDocument:
        """Return one document, or raise DocumentNotFoundError."""
        for doc in self.load():
            if doc.id == doc_id:
                return doc
        raise DocumentNotFoundError(f"No document with id {doc_id}")

    def add(self, document: AnalyzedDocument):
        """Insert a new document at the front of the collection."""
        self._mutate(lambda docs: [document] + docs)
        logger.debug(f"Stored document {document.id} ({document.name})")

    def replace(self, document: AnalyzedDocument):
        """Replace the stored document that has the same id."""

        def change(docs: list[AnalyzedDocument]) -> list[AnalyzedDocument]:
            if not any(doc.id == document.id for doc in docs):
                raise DocumentNotFoundError(f"No document with id {document.id}")
            return [document if doc.id == document.id else doc for doc in docs]

        self._mutate(change)

    def delete(self, doc_id: str):
        """Remove a document from the collection."""

        def change(docs: list[AnalyzedDocument]) -> list[AnalyzedDocument]:
            remaining = [doc for doc in docs if doc.id != doc_id]
            if len(remaining) == len(docs):
                raise DocumentNotFoundError(f"No document with id {doc_id}")
            return remaining

        self._mutate(change)
        logger.debug(f"Deleted document {doc_id}")
