"""Unit tests for app.versioning.recorder: change classification rules."""

from datetime import datetime, timezone

import pytest

from app.models.document import Document
from app.models.document_version import ChangeType, DocumentVersion
from app.versioning.recorder import Snapshot, classify_change, record_change

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


class TestClassifyChange:

    def test_first_write_is_created(self):
        assert classify_change(None, Snapshot("Draft", ""), True) is ChangeType.created

    def test_first_write_wins_even_with_previous(self):
        prev = Snapshot("Draft", "")
        assert classify_change(prev, prev, True) is ChangeType.created

    def test_missing_previous_is_created(self):
        assert classify_change(None, Snapshot("Draft", "x"), False) is ChangeType.created

    @pytest.mark.parametrize("old,new", [
        (("A", "one"), ("B", "two")),
        (("Draft", ""), ("Final", "<p>Hello</p>")),
    ])
    def test_title_and_content_change_is_content_modified(self, old, new):
        change = classify_change(Snapshot(*old), Snapshot(*new), False)
        assert change is ChangeType.content_modified

    def test_title_only(self):
        assert classify_change(Snapshot("A", "x"), Snapshot("B", "x"), False) is ChangeType.title_updated

    def test_content_only(self):
        assert classify_change(Snapshot("A", "x"), Snapshot("A", "y"), False) is ChangeType.content_modified

    def test_no_change(self):
        assert classify_change(Snapshot("A", "x"), Snapshot("A", "x"), False) is None

    def test_never_restored(self):
        seen = {
            classify_change(Snapshot(t1, c1), Snapshot(t2, c2), first)
            for t1 in ("a", "b") for c1 in ("x", "y")
            for t2 in ("a", "b") for c2 in ("x", "y")
            for first in (True, False)
        }
        assert ChangeType.restored not in seen


class TestRecordChange:

    def _doc(self, db, user, title="Draft", content=""):
        doc = Document(user_id=user.id, title=title, content=content, created_at=NOW, updated_at=NOW)
        db.add(doc)
        db.flush()
        return doc

    def test_appends_incoming_state(self, db, user):
        doc = self._doc(db, user)
        previous = Snapshot.of(doc)
        doc.content = "<p>Hello</p>"
        version = record_change(db, doc, previous, user.id, now=NOW)
        db.commit()

        assert version.id is not None
        assert version.change_type == "content_modified"
        assert version.title == "Draft"
        assert version.content == "<p>Hello</p>"
        assert version.user_id == user.id

    def test_no_row_when_unchanged(self, db, user):
        doc = self._doc(db, user)
        assert record_change(db, doc, Snapshot.of(doc), user.id) is None
        db.commit()
        assert db.query(DocumentVersion).count() == 0

    def test_first_write(self, db, user):
        doc = self._doc(db, user)
        version = record_change(db, doc, None, user.id, is_first_write=True, now=NOW)
        assert version.change_type == "created"
