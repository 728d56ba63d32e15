"""Tests for the fetch policy, JSON Lines serde and local internal storage"""

import io
from unittest.mock import patch

import pytest

from todoist_tasks import (
    FetchType,
    LocalInternalStorage,
    RunContext,
    StorageError,
    apply_fetch_type,
)
from todoist_tasks.fetch import store_records
from todoist_tasks.serde import read_records, write_records

RECORDS = [
    {"id": "1", "content": "First", "labels": ["home"]},
    {"id": "2", "content": "Second", "due": {"date": "2026-10-17"}},
    {"id": "3", "content": "Third ✓"},
]


@pytest.fixture
def ctx(tmp_path):
    return RunContext(
        storage=LocalInternalStorage(tmp_path / "storage"),
        working_dir=tmp_path / "work",
        task_id="list_tasks",
    )


# =========================================================================
# apply_fetch_type
# =========================================================================


class TestApplyFetchType:

    def test_fetch_returns_everything(self, ctx):
        result = apply_fetch_type(ctx, RECORDS, FetchType.FETCH)

        assert result.items == RECORDS
        assert result.count == len(RECORDS)
        assert result.item is None
        assert result.uri is None

    def test_fetch_empty(self, ctx):
        result = apply_fetch_type(ctx, [], FetchType.FETCH)
        assert result.items == []
        assert result.count == 0

    def test_fetch_one_returns_first_with_total_count(self, ctx):
        result = apply_fetch_type(ctx, RECORDS, FetchType.FETCH_ONE)

        assert result.item == RECORDS[0]
        assert result.count == 3
        assert result.items is None

    def test_fetch_one_on_empty_list_is_not_an_error(self, ctx, caplog):
        with caplog.at_level("WARNING"):
            result = apply_fetch_type(ctx, [], FetchType.FETCH_ONE, label="tasks")

        assert result.item is None
        assert result.count == 0
        assert "No tasks found" in caplog.text

    def test_store_writes_every_record_in_order(self, ctx):
        result = apply_fetch_type(ctx, RECORDS, FetchType.STORE)

        assert result.count == 3
        assert result.uri.startswith("storage:///list_tasks/")
        assert result.uri.endswith(".jsonl")
        assert result.items is None and result.item is None

        with open(ctx.storage.get_file(result.uri), encoding="utf-8") as f:
            stored = list(read_records(f))
        assert stored == RECORDS

    def test_store_empty_collection(self, ctx):
        result = apply_fetch_type(ctx, [], FetchType.STORE)

        assert result.count == 0
        assert ctx.storage.get_file(result.uri).read_text() == ""

    def test_store_removes_temp_file(self, ctx):
        apply_fetch_type(ctx, RECORDS, FetchType.STORE)
        assert list(ctx.working_dir.glob("*.jsonl")) == []


# =========================================================================
# store_records failure handling
# =========================================================================


class TestStoreRecordsFailure:

    def test_write_failure_publishes_nothing(self, ctx):
        put_calls = []
        ctx.storage.put_file = lambda *args, **kwargs: put_calls.append(args)

        with patch("todoist_tasks.fetch.write_records", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                store_records(ctx, RECORDS)

        assert put_calls == []
        assert list(ctx.working_dir.glob("*.jsonl")) == []

    def test_file_is_closed_and_complete_before_put(self, ctx):
        seen = {}
        real_put = ctx.storage.put_file

        def checking_put(path, prefix=None):
            with open(path, encoding="utf-8") as f:
                seen["records"] = list(read_records(f))
            return real_put(path, prefix=prefix)

        ctx.storage.put_file = checking_put
        store_records(ctx, RECORDS)

        assert seen["records"] == RECORDS


# =========================================================================
# serde
# =========================================================================


class TestSerde:

    def test_one_record_per_line(self):
        buffer = io.StringIO()
        assert write_records(buffer, RECORDS) == 3

        lines = buffer.getvalue().splitlines()
        assert len(lines) == 3
        assert "Third ✓" in lines[2]

    def test_non_json_values_written_as_strings(self):
        from datetime import date

        buffer = io.StringIO()
        write_records(buffer, [{"due": date(2026, 10, 17)}])
        buffer.seek(0)

        assert list(read_records(buffer)) == [{"due": "2026-10-17"}]

    def test_read_skips_blank_lines(self):
        source = io.StringIO('{"id": "1"}\n\n{"id": "2"}\n')
        assert [r["id"] for r in read_records(source)] == ["1", "2"]


# =========================================================================
# LocalInternalStorage
# =========================================================================


class TestLocalInternalStorage:

    def test_put_then_get(self, tmp_path):
        storage = LocalInternalStorage(tmp_path / "store")
        source = tmp_path / "data.jsonl"
        source.write_text('{"id": "1"}\n')

        uri = storage.put_file(source, prefix="list_projects")

        assert uri.startswith("storage:///list_projects/")
        assert storage.get_file(uri).read_text() == '{"id": "1"}\n'

    def test_each_put_gets_a_new_uri(self, tmp_path):
        storage = LocalInternalStorage(tmp_path / "store")
        source = tmp_path / "data.jsonl"
        source.write_text("x")

        assert storage.put_file(source) != storage.put_file(source)

    def test_rejects_foreign_scheme(self, tmp_path):
        storage = LocalInternalStorage(tmp_path / "store")
        with pytest.raises(StorageError):
            storage.get_file("file:///etc/passwd")

    def test_rejects_path_traversal(self, tmp_path):
        storage = LocalInternalStorage(tmp_path / "store")
        with pytest.raises(StorageError):
            storage.get_file("storage:///../../etc/passwd")

    def test_missing_file(self, tmp_path):
        storage = LocalInternalStorage(tmp_path / "store")
        with pytest.raises(StorageError):
            storage.get_file("storage:///files/abc/nothing.jsonl")
