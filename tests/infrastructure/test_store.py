"""Tests for the SQLite-backed Store handle."""

from pathlib import Path

import pytest
from sqlalchemy import text

from mentat_cli.errors import StoreError
from mentat_cli.infrastructure.store import MEMORY_PATH, Store


class TestOpen:
    def test_creates_file(self, tmp_path: Path) -> None:
        db = tmp_path / "my.db"
        store = Store.open(str(db))
        try:
            assert db.exists()
            assert store.path == str(db)
            assert store.is_open
        finally:
            store.close()

    def test_wal_journal(self, tmp_path: Path) -> None:
        store = Store.open(str(tmp_path / "wal.db"))
        try:
            with store.engine.connect() as conn:
                mode = conn.execute(text("PRAGMA journal_mode")).scalar()
            assert mode == "wal"
        finally:
            store.close()

    def test_wal_disabled(self, tmp_path: Path) -> None:
        store = Store.open(str(tmp_path / "plain.db"), wal=False)
        try:
            with store.engine.connect() as conn:
                mode = conn.execute(text("PRAGMA journal_mode")).scalar()
            assert mode != "wal"
        finally:
            store.close()

    def test_foreign_keys_enabled(self) -> None:
        store = Store.open(MEMORY_PATH)
        try:
            with store.engine.connect() as conn:
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            store.close()

    def test_memory_store_shares_connection(self) -> None:
        store = Store.open(MEMORY_PATH)
        try:
            with store.engine.begin() as conn:
                conn.execute(text("CREATE TABLE t (x INTEGER)"))
            with store.engine.connect() as conn:
                assert conn.execute(text("SELECT count(*) FROM t")).scalar() == 0
        finally:
            store.close()

    def test_unreachable_path(self, tmp_path: Path) -> None:
        path = str(tmp_path / "no" / "such" / "dir.db")
        with pytest.raises(StoreError, match="Unable to open database at"):
            Store.open(path)

    @pytest.mark.parametrize("name", ["a.db?mode=ro", "notes#1.db", "x?y#z.db"])
    def test_url_characters_stay_in_filename(self, tmp_path: Path, name: str) -> None:
        db = tmp_path / name
        store = Store.open(str(db))
        try:
            assert store.path == str(db)
            assert db.exists()
            assert sorted(p.name for p in tmp_path.glob("*.db*") if "-" not in p.name) == [name]
        finally:
            store.close()


class TestClose:
    def test_close_is_idempotent(self) -> None:
        store = Store.open(MEMORY_PATH)
        store.close()
        store.close()
        assert store.is_open is False

    def test_engine_after_close_raises(self) -> None:
        store = Store.open(MEMORY_PATH)
        store.close()
        with pytest.raises(StoreError, match="is closed"):
            _ = store.engine
