"""Tests for database setup, configuration and error rendering."""

import logging
import os
from unittest.mock import patch

import pytest
from fastapi.exceptions import RequestValidationError

from user_crud_api.app.core import db
from user_crud_api.app.core.config import Settings, settings
from user_crud_api.app.core.errors import ConflictError, NotFoundError, validation_error_from
from user_crud_api.app.core.logging_config import resolve_level, setup_logging


class TestDatabase:
    def test_init_db_is_idempotent(self, database):
        db.init_db()
        conn = db.get_connection()
        try:
            versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
            columns = [row["name"] for row in conn.execute("PRAGMA table_info(users)")]
        finally:
            conn.close()
        assert versions == [version for version, _ in db.MIGRATIONS]
        assert columns[:4] == ["id", "email", "first_name", "last_name"]

    def test_absolute_path_used_as_is(self, database):
        assert db.get_database_path() == str(database)

    def test_relative_path_resolved_under_package(self, monkeypatch):
        monkeypatch.setattr(settings, "database_url", "users.db")
        path = db.get_database_path()
        assert os.path.isabs(path)
        assert path.endswith(os.path.join("user_crud_api", "users.db"))


class TestSettings:
    def test_cors_origins_split(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.local, http://b.local,")
        assert Settings().cors_origins == ["http://a.local", "http://b.local"]


class TestErrors:
    def test_error_body(self):
        assert NotFoundError("User with ID 3 not found").to_dict() == {
            "statusCode": 404,
            "message": "User with ID 3 not found",
            "error": "Not Found",
        }
        assert ConflictError("taken").error == "Conflict"

    def test_validation_error_fields(self):
        exc = RequestValidationError([
            {"loc": ("body", "email"), "msg": "value is not a valid email address", "type": "value_error"},
            {"loc": ("path", "user_id"), "msg": "Input should be a valid integer", "type": "int_parsing"},
        ])
        error = validation_error_from(exc)
        assert error.status_code == 400
        assert [e["field"] for e in error.errors] == ["email", "user_id"]
        assert error.message.startswith("email: value is not a valid email address")


def test_setup_logging_configures_once(tmp_path):
    root = logging.getLogger()
    old_level = root.level
    logfile = tmp_path / "api.log"
    with patch.object(root, "handlers", []):
        try:
            setup_logging("debug", str(logfile))
            setup_logging("error")
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 2
        finally:
            for handler in root.handlers:
                handler.close()
            root.setLevel(old_level)


def test_in_memory_database_refused(monkeypatch):
    monkeypatch.setattr(settings, "database_url", ":memory:")
    with pytest.raises(ValueError, match="in-memory"):
        db.get_database_path()
    with pytest.raises(ValueError):
        db.init_db()


class TestLoggingLevel:
    def test_defaults_to_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", False)
        monkeypatch.setattr(settings, "log_level", "warning")
        assert resolve_level() == logging.WARNING

    def test_debug_flag_wins(self, monkeypatch):
        monkeypatch.setattr(settings, "debug", True)
        monkeypatch.setattr(settings, "log_level", "error")
        assert resolve_level() == logging.DEBUG

    def test_unknown_name_falls_back_to_info(self):
        assert resolve_level("chatty") == logging.INFO

    def test_log_file_taken_from_settings(self, monkeypatch, tmp_path):
        logfile = tmp_path / "from-settings.log"
        monkeypatch.setattr(settings, "log_file", str(logfile))
        root = logging.getLogger()
        old_level = root.level
        with patch.object(root, "handlers", []):
            try:
                setup_logging("info")
                assert [type(h) for h in root.handlers] == [logging.StreamHandler, logging.FileHandler]
                assert root.handlers[1].baseFilename == str(logfile.resolve())
            finally:
                for handler in root.handlers:
                    handler.close()
                root.setLevel(old_level)
