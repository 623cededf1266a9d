import importlib.util
from pathlib import Path

import pytest

from src.utils.config_loader import load_feed_config

SCRIPT = Path(__file__).parent.parent / "scripts" / "run_feed.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("run_feed", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def run_feed():
    return _load_script()


@pytest.fixture
def mock_config(tmp_path):
    return load_feed_config(
        tmp_path / "missing.yml",
        env={"INTEGRATIONS_MODE": "mock", "CAFE24_GRANT_MODE": "authorization_code"},
    )


@pytest.mark.asyncio
async def test_build_returns_rotated_refresh_token(run_feed, mock_config):
    page, refresh_token = await run_feed.build(mock_config, "seed-refresh")

    assert page.product_count == 3
    assert refresh_token
    assert refresh_token != "seed-refresh"


def test_rotated_refresh_token_is_printed(run_feed, capsys):
    run_feed.report_rotated_refresh_token("R2")

    assert "New refresh token: R2" in capsys.readouterr().out


def test_rotated_refresh_token_is_written_to_file(run_feed, tmp_path, capsys):
    target = tmp_path / "secrets" / "refresh_token"

    run_feed.report_rotated_refresh_token("R2", target)

    assert target.read_text(encoding="utf-8") == "R2\n"
    assert "R2" not in capsys.readouterr().out


def test_main_surfaces_rotated_token(run_feed, monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("INTEGRATIONS_MODE", "mock")
    monkeypatch.setenv("CAFE24_GRANT_MODE", "authorization_code")
    monkeypatch.delenv("REDIS_URL", raising=False)
    output = tmp_path / "ai-feed.html"
    monkeypatch.setattr(
        "sys.argv",
        ["run_feed.py", "--config", str(tmp_path / "missing.yml"), "--output", str(output), "--refresh-token", "seed"],
    )

    assert run_feed.main() == 0
    assert output.exists()
    out = capsys.readouterr().out
    assert "New refresh token: mock-refresh-" in out
