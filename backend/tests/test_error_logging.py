import logging
import uuid

import pytest

from app.core.exceptions import NotFoundError, ServerError
from app.models import ErrorLog
from app.services.error_logging import error_logger, sanitize_data, setup_file_logging, truncate_string


def test_sanitize_data_redacts_secrets():
    user_id = uuid.uuid4()
    data = {
        "password": "hunter22",
        "nested": {"api_key": "k", "name": "Reel"},
        "token_list": ["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.x.y"],
        "ids": [user_id],
    }

    assert sanitize_data(data) == {
        "password": "[REDACTED]",
        "nested": {"api_key": "[REDACTED]", "name": "Reel"},
        "token_list": "[REDACTED]",
        "ids": [str(user_id)],
    }


def test_truncate_string():
    assert truncate_string("short", 10) == "short"
    assert truncate_string("x" * 20, 10).startswith("x" * 10 + "... [TRUNCATED")


def test_log_error_persists_row(monkeypatch, db, session_factory):
    monkeypatch.setattr(error_logger, "db_session_factory", session_factory)

    try:
        raise ServerError("Server error", {"project_id": "abc"})
    except ServerError as exc:
        error_id = error_logger.log_error(exc, context={"secret": "s", "project_id": "abc"})

    row = db.query(ErrorLog).filter(ErrorLog.id == error_id).one()
    assert row.error_type == "ServerError"
    assert row.error_code == "500"
    assert row.function == "test_log_error_persists_row"
    assert "ServerError: Server error" in row.stack_trace
    assert row.context_data == {"secret": "[REDACTED]", "project_id": "abc"}


def test_log_error_without_database():
    assert error_logger.log_error(NotFoundError("missing"), save_to_db=False) is None


def test_setup_file_logging(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        assert setup_file_logging(str(tmp_path / "logs")) is True
        assert (tmp_path / "logs" / "errors.log").exists()
    finally:
        for handler in root.handlers[len(before):]:
            root.removeHandler(handler)
            handler.close()


@pytest.mark.parametrize("path", ["/health", "/"])
def test_service_is_up(client, path):
    assert client.get(path).status_code == 200
