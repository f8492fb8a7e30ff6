"""CLI tests: offline commands, the missing-key path and credential commands."""
from __future__ import annotations

import json
import logging

import pytest

from mistral_providers.cli import main
from mistral_providers.cli.cli_actions import build_request, event_to_dict
from mistral_providers.cli.cli_parser import COMMANDS, build_parser
from mistral_providers.base.logging import BASE_LOGGER_NAME, configure_logger
from mistral_providers.base.streaming import StopEvent, StopReason, TextEvent
from mistral_providers.persistence.sqlite import open_credential_store


def test_parser_registers_commands():
    parser = build_parser()
    for cmd in COMMANDS:
        extra = ["--prompt", "x"] if cmd in {"plan", "run"} else []
        extra += ["--api-key", "k"] if cmd == "login" else []
        assert parser.parse_args([cmd, *extra]).cmd == cmd  # nosec B101


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_models_json(capsys):
    assert main(["models", "--json"]) == 0  # nosec B101
    out = json.loads(capsys.readouterr().out)
    ids = [row["id"] for row in out["models"]]
    assert out["provider"] == "mistral"  # nosec B101
    assert "mistral-small-latest" in ids and ids == sorted(ids)  # nosec B101


def test_plan_prints_payload_without_network(capsys):
    code = main(["plan", "--prompt", "Hi", "--system", "Be brief", "--temperature", "0.2"])
    out = json.loads(capsys.readouterr().out)

    assert code == 0  # nosec B101
    assert out["url"] == "https://api.mistral.ai/v1/chat/completions"  # nosec B101
    assert out["model_known"] is True  # nosec B101
    assert out["payload"] == {  # nosec B101
        "model": "mistral-small-latest",
        "messages": [
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "Hi"},
        ],
        "stream": True,
        "temperature": 0.2,
    }


def test_plan_with_unknown_model_still_plans(capsys):
    main(["plan", "--prompt", "Hi", "--model", "not-a-model"])
    out = json.loads(capsys.readouterr().out)
    assert out["model_known"] is False and out["payload"]["model"] == "not-a-model"  # nosec B101


def test_run_without_key_prints_hint(capsys, tmp_path):
    code = main(["--db-path", str(tmp_path / "c.db"), "run", "--prompt", "Hi"])
    err = json.loads(capsys.readouterr().err)

    assert code == 2  # nosec B101
    assert err["set_env"] == "MISTRAL_API_KEY"  # nosec B101


def test_run_unknown_model_exits_2(capsys, tmp_path):
    code = main(["--db-path", str(tmp_path / "c.db"), "run", "--prompt", "Hi", "--model", "nope"])
    assert code == 2  # nosec B101
    assert "unknown model" in capsys.readouterr().err  # nosec B101


def test_login_then_logout(capsys, tmp_path):
    db = str(tmp_path / "c.db")
    assert main(["--db-path", db, "login", "--api-key", "sk-cli"]) == 0  # nosec B101  # pragma: allowlist secret - dummy test value
    url = json.loads(capsys.readouterr().out)["url"]

    store = open_credential_store(db)
    try:
        assert store.read_credentials(url).password == b"sk-cli"  # nosec B101
    finally:
        store.close()

    assert main(["--db-path", db, "logout"]) == 0  # nosec B101
    store = open_credential_store(db)
    try:
        assert store.list_urls() == []  # nosec B101
    finally:
        store.close()


def test_build_request_and_event_to_dict():
    request = build_request("Hi", system="s")
    assert [m.role.value for m in request.messages] == ["system", "user"]  # nosec B101
    assert event_to_dict(TextEvent("x")) == {"type": "text", "text": "x"}  # nosec B101
    assert event_to_dict(StopEvent(StopReason.TOOL_USE)) == {"type": "stop", "reason": "tool_use"}  # nosec B101


def test_log_options_configure_shared_logger(capsys, tmp_path):
    log_file = tmp_path / "logs" / "cli.log"
    try:
        assert main(["--log-level", "DEBUG", "--log-file", str(log_file), "models"]) == 0  # nosec B101
        logger = logging.getLogger(BASE_LOGGER_NAME)
        assert logger.level == logging.DEBUG  # nosec B101
        assert any(getattr(h, "baseFilename", None) == str(log_file) for h in logger.handlers)  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
    assert "mistral-small-latest" in capsys.readouterr().out  # nosec B101


def test_plan_max_tokens_reaches_payload(capsys):
    main(["plan", "--prompt", "Hi", "--max-tokens", "64"])
    assert json.loads(capsys.readouterr().out)["payload"]["max_tokens"] == 64  # nosec B101
