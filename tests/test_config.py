import logging
from pathlib import Path

from bbref.config import Settings, settings_from_env


def test_defaults(monkeypatch):
    for name in ("SEASON", "OUTPUT_DIR", "MAX_WORKERS", "RANDOM_DELAY"):
        monkeypatch.delenv(f"BBREF_{name}", raising=False)
    settings = settings_from_env()
    assert settings.season == "2022"
    assert settings.max_workers == 4
    assert settings.output_dir == Path("output") / "gamelogs"
    assert settings.teams_url == "https://www.basketball-reference.com/teams/"
    assert settings.index_path == Path("output") / "gamelogs" / "index.json"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("BBREF_SEASON", "2023")
    monkeypatch.setenv("BBREF_OUTPUT_DIR", "/tmp/gamelogs")
    monkeypatch.setenv("BBREF_MAX_WORKERS", "2")
    monkeypatch.setenv("BBREF_RANDOM_DELAY", "0.5")
    settings = settings_from_env()
    assert settings.season == "2023"
    assert settings.output_dir == Path("/tmp/gamelogs")
    assert settings.max_workers == 2
    assert settings.random_delay == 0.5


def test_invalid_numbers_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("BBREF_MAX_WORKERS", "four")
    monkeypatch.setenv("BBREF_REQUEST_DELAY", "soon")
    with caplog.at_level(logging.WARNING, logger="bbref.config"):
        settings = settings_from_env()
    assert settings.max_workers == 4
    assert settings.request_delay == 0.0
    assert len(caplog.records) == 2


def test_teams_url_tolerates_trailing_slash():
    settings = Settings(base_url="https://example.com/")
    assert settings.teams_url == "https://example.com/teams/"
