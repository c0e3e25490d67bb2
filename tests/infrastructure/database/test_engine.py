"""Tests for database engine setup and initialization."""

from pathlib import Path

from sqlalchemy import inspect, text

from shelfctl.infrastructure.database.engine import create_db_engine, init_database


class TestCreateDbEngine:
    def test_wal_mode_enabled(self, tmp_path: Path) -> None:
        engine = create_db_engine(tmp_path / "test.db")
        with engine.connect() as conn:
            result = conn.execute(text("PRAGMA journal_mode")).scalar()
        assert result == "wal"
        engine.dispose()


class TestInitDatabase:
    def test_creates_default_db_file(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        assert (tmp_path / ".shelfctl" / "shelfctl.db").is_file()
        engine.dispose()

    def test_relative_path_resolved_against_root(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path, Path("data") / "lib.db")
        assert (tmp_path / "data" / "lib.db").is_file()
        engine.dispose()

    def test_absolute_path_used_as_is(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "lib.db"
        engine = init_database(tmp_path / "root", target)
        assert target.is_file()
        engine.dispose()

    def test_creates_tables(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        assert set(inspect(engine).get_table_names()) == {"books", "rentals"}
        engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        init_database(tmp_path).dispose()
        engine = init_database(tmp_path)
        assert "books" in inspect(engine).get_table_names()
        engine.dispose()
