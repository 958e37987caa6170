"""Tests for structured logging helpers."""

import pytest
import structlog

from tasklane.core.config import Settings
from tasklane.core.logging import (
    add_correlation_id,
    add_logger_name,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    rename_message_field,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_add_correlation_id_keeps_bound_value():
    event = add_correlation_id(None, "info", {"correlation_id": "cid_abc"})

    assert event["correlation_id"] == "cid_abc"


def test_add_correlation_id_generates_one():
    event = add_correlation_id(None, "info", {})

    assert event["correlation_id"].startswith("cid_")


def test_add_logger_name_falls_back_to_package():
    assert add_logger_name(object(), "info", {})["logger"] == "tasklane"


def test_rename_message_field():
    assert rename_message_field(None, "info", {"event": "hello"}) == {"message": "hello"}


def test_bind_and_clear_correlation_id():
    bind_correlation_id("cid_123")
    assert structlog.contextvars.get_contextvars()["correlation_id"] == "cid_123"

    clear_context()
    assert "correlation_id" not in structlog.contextvars.get_contextvars()


def test_json_logging(capsys):
    configure_logging(Settings(_env_file=None, environment="production", log_format="json"))

    get_logger("tasklane.test").info("Role assigned", role_name="admin")

    output = capsys.readouterr().out
    assert '"message": "Role assigned"' in output
    assert '"role_name": "admin"' in output


def test_log_level_filters(capsys):
    configure_logging(Settings(_env_file=None, environment="production", log_level="WARNING"))

    get_logger("tasklane.test").info("hidden")

    assert "hidden" not in capsys.readouterr().out
