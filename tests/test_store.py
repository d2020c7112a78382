"""Tests for the persisted document collection."""

import json
import threading

import pytest
from sqlalchemy import inspect

from docanalyzer.database import (
    DEFAULT_COLLECTION_KEY,
    Database,
    DocumentStore,
    KeyValue,
    get_database,
    initialize_migrations,
)
from docanalyzer.errors import DocumentNotFoundError
from docanalyzer.models import AnalyzedDocument, DocumentMetrics


def make_document(name: str, text: str = "some text") -> AnalyzedDocument:
    return AnalyzedDocument(
        name=name,
        full_text=text,
        metadata=DocumentMetrics(word_count=len(text.split()), reading_time=1),
    )


class TestAnalyzedDocument:
    """Tests for the stored record layout."""

    def test_record_uses_camel_case_keys(self, sample_document):
        record = sample_document.to_record()

        assert record["fullText"] == sample_document.full_text
        assert record["metadata"] == {
            "wordCount": 10,
            "pageCount": 2,
            "readingTime": 1,
            "sentiment": "neutral",
        }
        assert set(record) == {
            "id", "name", "type", "tags", "summary", "fullText",
            "date", "metadata", "insights", "graphs",
        }

    def test_from_record(self, sample_document):
        restored = AnalyzedDocument.from_record(sample_document.to_record())
        assert restored == sample_document

    def test_defaults(self):
        doc = make_document("a.txt")
        assert doc.id
        assert doc.type == "Others"
        assert doc.tags == []
        assert doc.insights == ""
        assert doc.graphs == []
        assert len(doc.date) == 10

    def test_ids_are_unique(self):
        assert make_document("a.txt").id != make_document("a.txt").id


class TestDocumentStore:
    """Tests for DocumentStore."""

    def test_empty_store(self, store):
        assert store.load() == []

    def test_add_prepends(self, store):
        first = make_document("first.txt")
        second = make_document("second.txt")

        store.add(first)
        store.add(second)

        assert [doc.name for doc in store.load()] == ["second.txt", "first.txt"]

    def test_get(self, store, sample_document):
        store.add(sample_document)
        assert store.get(sample_document.id) == sample_document

    def test_get_missing(self, store):
        with pytest.raises(DocumentNotFoundError):
            store.get("nope")

    def test_replace_keeps_position(self, store):
        docs = [make_document(f"{i}.txt") for i in range(3)]
        for doc in docs:
            store.add(doc)

        updated = docs[1].model_copy(update={"summary": "rewritten"})
        store.replace(updated)

        loaded = store.load()
        assert [doc.id for doc in loaded] == [docs[2].id, docs[1].id, docs[0].id]
        assert loaded[1].summary == "rewritten"

    def test_replace_missing(self, store):
        with pytest.raises(DocumentNotFoundError):
            store.replace(make_document("ghost.txt"))

    def test_delete(self, store):
        keep = make_document("keep.txt")
        drop = make_document("drop.txt")
        store.add(keep)
        store.add(drop)

        store.delete(drop.id)

        assert [doc.id for doc in store.load()] == [keep.id]

    def test_delete_missing_leaves_collection(self, store, sample_document):
        store.add(sample_document)

        with pytest.raises(DocumentNotFoundError):
            store.delete("nope")

        assert store.load() == [sample_document]

    def test_save_all(self, store):
        docs = [make_document("a.txt"), make_document("b.txt")]
        store.save_all(docs)
        assert store.load() == docs

    def test_stored_as_single_json_array(self, store, database, sample_document):
        """Test that the collection is one JSON array under the collection key."""
        store.add(sample_document)

        session = database.get_session()
        try:
            rows = session.query(KeyValue).all()
        finally:
            session.close()

        assert [row.key for row in rows] == [DEFAULT_COLLECTION_KEY]
        records = json.loads(rows[0].value)
        assert isinstance(records, list)
        assert records[0]["fullText"] == sample_document.full_text

    def test_persists_across_instances(self, tmp_path, sample_document):
        db = Database(tmp_path / "persist.db")
        DocumentStore(db).add(sample_document)
        db.close()

        reopened = Database(tmp_path / "persist.db")
        try:
            assert DocumentStore(reopened).load() == [sample_document]
        finally:
            reopened.close()

    def test_separate_keys_are_independent(self, database, sample_document):
        DocumentStore(database, key="one").add(sample_document)
        assert DocumentStore(database, key="two").load() == []

    def test_concurrent_adds_are_not_lost(self, store):
        docs = [make_document(f"{i}.txt") for i in range(20)]
        threads = [threading.Thread(target=store.add, args=(doc,)) for doc in docs]

        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert {doc.id for doc in store.load()} == {doc.id for doc in docs}


class TestDatabase:
    """Tests for Database helpers and migrations."""

    def test_get_database_requires_path_first(self, monkeypatch):
        monkeypatch.setattr("docanalyzer.database.models._database", None)
        with pytest.raises(ValueError):
            get_database()

    def test_get_database_replaces_on_new_path(self, tmp_path, monkeypatch):
        monkeypatch.setattr("docanalyzer.database.models._database", None)

        first = get_database(tmp_path / "a.db")
        assert get_database() is first

        second = get_database(tmp_path / "b.db")
        assert second is not first
        assert second.db_path == tmp_path / "b.db"
        second.close()

    def test_migrations_apply_once(self, database):
        manager = initialize_migrations(database)
        assert "key_values" not in inspect(database.engine).get_table_names()

        assert manager.apply_migrations() == 1
        assert "key_values" in inspect(database.engine).get_table_names()
        assert manager.apply_migrations() == 0

        session = database.get_session()
        try:
            assert manager.get_current_version(session) == 1
        finally:
            session.close()
