"""
Unit tests for the JSON history store and record serialization
"""

import datetime
import json
import uuid

import pytest

from plainly.core.exceptions import HistoryStoreError
from plainly.core.types import ContentKindTag, HistoryRecord
from plainly.history import JSONHistoryStore, record_from_dict, record_to_dict

pytestmark = pytest.mark.unit


def _record(title="Title", **overrides):
    values = {
        "title": title,
        "original_input_summary": "summary",
        "result_markdown": "# TL;DR\nok",
        "used_cloud": True,
        "kind": ContentKindTag.TEXT,
    }
    values.update(overrides)
    return HistoryRecord(**values)


@pytest.fixture
def store(tmp_path):
    return JSONHistoryStore(tmp_path / "history" / "explanation_history.json")


class TestSerialization:
    def test_field_names_and_timestamp_format(self):
        record = _record(
            created_at=datetime.datetime(2024, 5, 1, 12, 30, tzinfo=datetime.UTC),
            thumbnail=b"\x89PNG",
        )

        data = record_to_dict(record)

        assert set(data) == {
            "id",
            "createdAt",
            "title",
            "originalInputSummary",
            "resultMarkdown",
            "usedCloud",
            "kind",
            "thumbnail",
        }
        assert data["createdAt"] == "2024-05-01T12:30:00+00:00"
        assert data["kind"] == "text"
        assert data["thumbnail"] == "iVBORw=="

    def test_timestamps_are_normalized_to_utc(self):
        offset = datetime.timezone(datetime.timedelta(hours=2))
        record = _record(created_at=datetime.datetime(2024, 5, 1, 14, 0, tzinfo=offset))

        assert record_to_dict(record)["createdAt"] == "2024-05-01T12:00:00+00:00"

    @pytest.mark.parametrize(
        "mutation",
        [
            lambda d: d.pop("id"),
            lambda d: d.update(id="not-a-uuid"),
            lambda d: d.update(kind="podcast"),
            lambda d: d.update(createdAt="yesterday"),
            lambda d: d.update(thumbnail="***"),
            lambda d: d.update(usedCloud="false"),
            lambda d: d.update(usedCloud=1),
        ],
    )
    def test_malformed_entries_decode_to_none(self, mutation):
        data = record_to_dict(_record())
        mutation(data)
        assert record_from_dict(data) is None

    def test_naive_timestamp_is_read_as_utc(self):
        data = record_to_dict(_record())
        data["createdAt"] = "2024-05-01T12:00:00"

        record = record_from_dict(data)

        assert record.created_at == datetime.datetime(
            2024, 5, 1, 12, 0, tzinfo=datetime.UTC
        )


class TestJSONHistoryStore:
    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, store):
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_corrupt_file_is_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")

        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_wrong_shape_is_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"records": []}), encoding="utf-8")

        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_append_to_corrupt_file_starts_fresh(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("garbage", encoding="utf-8")
        record = _record()

        await store.append(record)

        assert await store.list() == [record]

    @pytest.mark.asyncio
    async def test_newest_first_on_disk(self, store):
        older, newer = _record("older"), _record("newer")
        await store.append(older)
        await store.append(newer)

        on_disk = json.loads(store.path.read_text(encoding="utf-8"))

        assert [e["title"] for e in on_disk] == ["newer", "older"]
        assert [r.title for r in await store.list()] == ["newer", "older"]

    @pytest.mark.asyncio
    async def test_write_is_atomic_via_temp_file(self, store):
        await store.append(_record())

        leftovers = list(store.path.parent.glob("*.tmp"))
        assert leftovers == []
        assert store.path.exists()

    @pytest.mark.asyncio
    async def test_malformed_entry_skipped_others_kept(self, store):
        good = _record("good")
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            json.dumps([{"id": "broken"}, record_to_dict(good), 42]),
            encoding="utf-8",
        )

        assert await store.list() == [good]

    @pytest.mark.asyncio
    async def test_remove_unknown_id_leaves_history(self, store):
        record = _record()
        await store.append(record)

        await store.remove(uuid.uuid4())

        assert await store.list() == [record]

    @pytest.mark.asyncio
    async def test_unwritable_location_raises_store_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        store = JSONHistoryStore(blocker / "explanation_history.json")

        with pytest.raises(HistoryStoreError):
            await store.append(_record())
