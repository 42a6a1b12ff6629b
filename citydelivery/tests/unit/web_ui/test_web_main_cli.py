from __future__ import annotations

import json
import logging

import pytest

from citydelivery.web_ui import main as web_main


@pytest.fixture(autouse=True)
def _keep_root_level(monkeypatch):
    monkeypatch.delenv("CITYDELIVERY_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CITYDELIVERY_DEBUG", raising=False)
    root = logging.getLogger()
    previous = root.level
    yield
    root.setLevel(previous)


def test_save_settings_persists_endpoint_override(tmp_path, capsys) -> None:
    web_main.main(
        [
            "--settings-dir",
            str(tmp_path),
            "--endpoint",
            "http://localhost:9000/fetch_deliveries.php",
            "--debug",
            "--save-settings",
            "--smoke-test",
        ]
    )

    saved = json.loads((tmp_path / "user_settings.json").read_text(encoding="utf-8"))
    assert saved["endpoint_url"] == "http://localhost:9000/fetch_deliveries.php"
    assert saved["debug_logging"] is True
    assert capsys.readouterr().out.startswith("web-smoke-ok ")
    assert logging.getLogger().level == logging.DEBUG


def test_smoke_test_without_save_writes_nothing(tmp_path, capsys) -> None:
    web_main.main(["--settings-dir", str(tmp_path), "--smoke-test"])

    assert not (tmp_path / "user_settings.json").exists()
    payload = json.loads(capsys.readouterr().out.split(" ", 1)[1])
    assert payload["request_timeout_s"] == 10


def test_save_settings_requires_settings_dir() -> None:
    with pytest.raises(SystemExit):
        web_main.main(["--save-settings", "--smoke-test"])
