# crawl.py
"""
Season crawl for basketball-reference gamelogs.

    /teams/  ->  /teams/ATL/2022.html  ->  /players/y/youngtr01/gamelog/2022

Team index and team season pages are only used for link discovery; each
gamelog page is parsed with the extractors in gamelog.py and written to
<output_dir>/<id>.csv, with <output_dir>/index.json mapping ids to names.
"""
from __future__ import annotations

import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from .config import Settings, get_settings
from .gamelog import extract_gamelog
from .logging_utils import get_logger
from .output import IdGenerator, IdMapper, write_gamelog_csv

logger = get_logger(__name__)

# fetch(url, settings=...) -> html
Fetcher = Callable[..., str]


# ===================== FETCHING =====================

def fetch_html(
    url: str,
    session: Optional[requests.Session] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    logger.info("Fetching HTML: %s", url)
    headers = {"User-Agent": settings.user_agent}
    http = session or requests
    resp = http.get(url, headers=headers, timeout=settings.request_timeout)
    resp.raise_for_status()
    return resp.text


class Throttle:
    """
    Caps the number of requests in flight and waits
    delay + uniform(0, random_delay) seconds before each one.
    """

    def __init__(
        self,
        max_concurrency: int,
        delay: float = 0.0,
        random_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._slots = threading.BoundedSemaphore(max(1, max_concurrency))
        self.delay = max(0.0, delay)
        self.random_delay = max(0.0, random_delay)
        self._sleep = sleep

    def wait_time(self) -> float:
        return self.delay + random.uniform(0.0, self.random_delay)

    def __enter__(self) -> "Throttle":
        self._slots.acquire()
        wait = self.wait_time()
        if wait > 0:
            self._sleep(wait)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._slots.release()


# ===================== LINK DISCOVERY =====================

def _unique(urls: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for u in urls:
        if u not in seen:
            seen.add(u)
            out.append(u)
    return out


def team_season_urls(soup: BeautifulSoup, page_url: str, season: str) -> List[str]:
    """
    Team season pages linked from the teams index,
    e.g. /teams/ATL/ -> /teams/ATL/2022.html.
    """
    links = soup.select(f"a[href$='{season}.html']")
    return _unique(urljoin(page_url, a["href"]) for a in links)


def gamelog_urls(soup: BeautifulSoup, page_url: str, season: str) -> List[str]:
    """
    Gamelog pages for the players on a team season page:
    /players/y/youngtr01.html -> /players/y/youngtr01/gamelog/2022
    """
    if season not in page_url:
        return []

    urls: List[str] = []
    for a in soup.select("a[href^='/players/']"):
        href = a["href"]
        if not href.endswith(".html") or "players" not in href:
            continue
        player_path = href.replace(".html", "", 1)
        urls.append(urljoin(page_url, f"{player_path}/gamelog/{season}"))
    return _unique(urls)


def is_gamelog_url(url: str, season: str) -> bool:
    return "gamelog" in url and season in url


# ===================== PAGE SCRAPE =====================

def scrape_gamelog_page(
    html: str,
    url: str,
    ids: IdGenerator,
    names: IdMapper,
    output_dir: Path,
) -> Optional[Path]:
    """
    Parse one gamelog page and write its CSV.
    Returns the CSV path, or None if the page had no table or no name.
    """
    soup = BeautifulSoup(html, "html.parser")
    gamelog = extract_gamelog(soup)
    if gamelog is None:
        logger.warning("No gamelog table found: %s", url)
        return None

    if gamelog.name is None:
        logger.warning("Could not retrieve player name for gamelog %s", url)
        return None

    id_ = ids.next_id()
    names.set_name(id_, gamelog.name)
    path = write_gamelog_csv(Path(output_dir) / f"{id_}.csv", gamelog.stats, gamelog.rows)
    logger.info("Gamelog %d (%s): %d games -> %s", id_, gamelog.name, len(gamelog.rows), path)
    return path


# ===================== SEASON =====================

def scrape_season(
    settings: Optional[Settings] = None,
    fetch: Fetcher = fetch_html,
) -> IdMapper:
    """
    Crawl every team of one season and write all player gamelogs.

    The teams index must load; a team or gamelog page that fails to load
    or parse is logged and skipped. index.json is written even when the
    crawl stops early, so the CSVs already on disk keep their names.
    """
    settings = settings or get_settings()
    season = settings.season
    output_dir = Path(settings.output_dir)
    throttle = Throttle(settings.max_workers, settings.request_delay, settings.random_delay)

    def get(url: str) -> str:
        with throttle:
            return fetch(url, settings=settings)

    index_url = settings.teams_url
    index_soup = BeautifulSoup(get(index_url), "html.parser")
    team_urls = team_season_urls(index_soup, index_url, season)
    logger.info("Found %d team pages for season %s", len(team_urls), season)

    team_pages: Dict[str, str] = {}
    with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
        future_to_url = {executor.submit(get, url): url for url in team_urls}
        for future in as_completed(future_to_url):
            url = future_to_url[future]
            try:
                team_pages[url] = future.result()
            except requests.RequestException as e:
                logger.error("Failed to fetch team page %s: %s", url, e)

    player_urls: List[str] = []
    for url in team_urls:
        if url not in team_pages:
            continue
        soup = BeautifulSoup(team_pages[url], "html.parser")
        player_urls.extend(gamelog_urls(soup, url, season))
    player_urls = [u for u in _unique(player_urls) if is_gamelog_url(u, season)]
    logger.info("Found %d gamelog pages for season %s", len(player_urls), season)

    ids = IdGenerator()
    names = IdMapper()

    def scrape_one(url: str) -> Optional[Path]:
        return scrape_gamelog_page(get(url), url, ids, names, output_dir)

    try:
        with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
            future_to_url = {executor.submit(scrape_one, url): url for url in player_urls}
            for future in as_completed(future_to_url):
                url = future_to_url[future]
                try:
                    future.result()
                except requests.RequestException as e:
                    logger.error("Failed to fetch gamelog %s: %s", url, e)
                except OSError:
                    raise
                except Exception as e:
                    logger.exception("Failed to parse gamelog %s: %s", url, e)
    finally:
        names.dump(settings.index_path)
    return names
