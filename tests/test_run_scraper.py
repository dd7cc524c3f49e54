from pathlib import Path

import requests

import run_scraper
from bbref.output import IdMapper


def test_main_passes_cli_overrides(monkeypatch, tmp_path):
    seen = {}

    def fake_scrape(settings):
        seen["settings"] = settings
        return IdMapper()

    monkeypatch.setattr(run_scraper, "scrape_season", fake_scrape)
    monkeypatch.setattr(run_scraper, "setup_logging", lambda **kwargs: None)

    code = run_scraper.main(
        ["--season", "2019", "--output-dir", str(tmp_path), "--workers", "2", "--verbose"]
    )

    assert code == 0
    settings = seen["settings"]
    assert settings.season == "2019"
    assert settings.output_dir == Path(tmp_path)
    assert settings.max_workers == 2
    assert settings.log_level == "DEBUG"


def test_main_reports_unreachable_index(monkeypatch):
    def fake_scrape(settings):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(run_scraper, "scrape_season", fake_scrape)
    monkeypatch.setattr(run_scraper, "setup_logging", lambda **kwargs: None)

    assert run_scraper.main(["--season", "2022"]) == 1
