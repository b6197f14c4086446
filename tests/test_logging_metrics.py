import json
import logging
import time

from notes_vault.config import Settings
from notes_vault.handlers.commands import build_dispatcher
from notes_vault.handlers.dispatcher import Command, CommandKind
from notes_vault.logging import configure_logging
from notes_vault import metrics
from notes_vault.metrics import Timer, commands_total, validation_errors_total
from notes_vault.state.vault import Vault


def test_json_logging_structure(capsys):
    configure_logging("INFO", "json")
    logging.getLogger(__name__).info(
        "sample",
        extra={
            "event_type": "test_event",
            "command": "SEARCH",
            "key": "gmail",
            "entries": 3,
            "error_category": "validation",
        },
    )
    captured = capsys.readouterr().err.strip().splitlines()[-1]
    data = json.loads(captured)
    for key in ["event_type", "command", "key", "entries", "error_category"]:
        assert key in data
    assert data["key"] == "gmail"


def test_logs_never_contain_secrets(caplog):
    vault = Vault()
    dispatcher = build_dispatcher()
    with caplog.at_level(logging.DEBUG):
        dispatcher.dispatch(
            vault,
            Command(
                CommandKind.ADD_PASSWORD,
                {"service": "Gmail", "username": "me", "password": "hunter2", "note": ""},
            ),
        )
        dispatcher.dispatch(vault, Command(CommandKind.ADD_NOTE, {"title": "Diary", "content": "secret text"}))
    assert caplog.records
    assert "hunter2" not in caplog.text
    assert "secret text" not in caplog.text


def test_counters_and_timer_update():
    dispatcher = build_dispatcher()
    dispatcher.dispatch(Vault(), Command(CommandKind.SEARCH, {"keyword": ""}))
    assert commands_total.value == 1
    assert validation_errors_total.value == 1
    timer = Timer("sleep_ms")
    with timer.time():
        time.sleep(0.001)
    assert timer.last_ms is not None and timer.last_ms > 0


def test_snapshot_and_reset():
    commands_total.inc(3)
    values = metrics.snapshot()
    assert values["commands_total"] == 3
    assert set(values) == {"commands_total", "validation_errors_total", "entries_total", "save_ms"}
    metrics.reset()
    assert metrics.snapshot()["commands_total"] == 0
    assert metrics.snapshot()["save_ms"] is None


def test_settings_defaults_and_env(monkeypatch):
    monkeypatch.delenv("NOTES_VAULT_VAULT_PATH", raising=False)
    assert Settings().vault_path.name == "vault-data.json"
    monkeypatch.setenv("NOTES_VAULT_VAULT_PATH", "/tmp/elsewhere.json")
    monkeypatch.setenv("NOTES_VAULT_LOG_FORMAT", "json")
    settings = Settings()
    assert str(settings.vault_path) == "/tmp/elsewhere.json"
    assert settings.log_format == "json"
