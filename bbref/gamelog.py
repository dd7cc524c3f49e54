# gamelog.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from bs4 import Tag

from .dom import element_children, get_attribute, get_text, search
from .logging_utils import get_logger

logger = get_logger(__name__)

# ===================== PAGE CONSTANTS =====================

GAMELOG_DIV_ID = "all_pgl_basic"
HEADER_ROW_CLASS = "thead"
NAME_ITEMPROP = "name"

# "Trae Young 2021-22 Game Log" -> the name ends right before " 2021-22"
SEASON_SUFFIX_RE = re.compile(r" [0-9]{4}-[0-9]{2}")

# Browsers clamp colspan to 1000
MAX_COLSPAN = 1000
COLSPAN_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class Gamelog:
    """Everything extracted from a single gamelog page."""

    labels: List[str] = field(default_factory=list)
    stats: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    name: Optional[str] = None


# ===================== TABLE LOCATION =====================

def find_gamelog_div(root: Tag) -> Optional[Tag]:
    def is_gamelog_div(node: Tag) -> bool:
        return node.name == "div" and get_attribute(node, "id") == GAMELOG_DIV_ID

    return search(root, is_gamelog_div)


def find_first_table(node: Tag) -> Optional[Tag]:
    return search(node, lambda n: n.name == "table")


def locate_gamelog_table(root: Tag) -> Optional[Tag]:
    """
    Return the gamelog <table> of a parsed gamelog page, or None.

    The table is the first <table> under div#all_pgl_basic. A page without
    that div simply has no gamelog (off-season, player never appeared).
    """
    div = find_gamelog_div(root)
    if div is None:
        return None
    return find_first_table(div)


# ===================== HEADERS =====================

def parse_table_headers(
    thead: Tag,
    log: Optional[logging.Logger] = None,
) -> Tuple[List[str], List[str]]:
    """
    Read the header cells of a gamelog <thead>.

    Returns (labels, stats): labels come from aria-label, stat keys from
    data-stat. Both lists are co-indexed; a <th> missing either attribute
    is dropped from both.
    """
    log = log or logger
    labels: List[str] = []
    stats: List[str] = []

    for tr in element_children(thead, "tr"):
        for th in element_children(tr, "th"):
            label = get_attribute(th, "aria-label")
            if label is None:
                log.warning("Skipping header cell without aria-label: %s", th)
                continue

            stat = get_attribute(th, "data-stat")
            if stat is None:
                log.warning("Skipping header cell without data-stat: %s", th)
                continue

            labels.append(label)
            stats.append(stat)

    return labels, stats


# ===================== BODY ROWS =====================

def _expand_unknown_cell(cell: Tag, stat: str, log: logging.Logger) -> List[str]:
    """
    Filler values for a cell whose data-stat is not a header column,
    e.g. <td data-stat="reason" colspan="22">Inactive</td>.
    """
    text = get_text(cell) or ""
    colspan = get_attribute(cell, "colspan")
    if colspan is None:
        log.debug("Stat %r not in headers and no colspan; adding a single cell", stat)
        return [text]

    if COLSPAN_RE.fullmatch(colspan) is None:
        log.warning("Invalid colspan %r on cell for stat %r; skipping cell", colspan, stat)
        return []

    if colspan.startswith("-"):
        return []

    digits = colspan.lstrip("+").lstrip("0")
    if len(digits) > len(str(MAX_COLSPAN)) or int(digits or "0") > MAX_COLSPAN:
        log.warning("colspan %r over %d on cell for stat %r; skipping cell", colspan, MAX_COLSPAN, stat)
        return []

    width = int(digits or "0")
    log.debug("Stat %r not in headers; filling %d cells with %r", stat, width, text)
    return [text] * width


def parse_table_data(
    tbody: Tag,
    stats: List[str],
    log: Optional[logging.Logger] = None,
) -> List[List[str]]:
    """
    Return the body of a gamelog table as rows of cell text.

    Cells are matched to header columns through data-stat. Repeated header
    rows (class="thead") are skipped. Cells for stats the header does not
    declare are expanded to colspan copies of their text so the remaining
    cells keep their position.
    """
    log = log or logger
    stat_index: Dict[str, int] = {stat: i for i, stat in enumerate(stats)}
    data: List[List[str]] = []

    for tr in element_children(tbody, "tr"):
        if get_attribute(tr, "class") == HEADER_ROW_CLASS:
            continue

        row: List[str] = []
        for cell in element_children(tr, "th", "td"):
            stat = get_attribute(cell, "data-stat")
            if stat is None:
                log.warning("Skipping table cell without data-stat: %s", cell)
                continue

            if stat not in stat_index:
                row.extend(_expand_unknown_cell(cell, stat, log))
                continue

            text = get_text(cell)
            if text is None:
                log.debug("No text in cell for stat %r", stat)
                text = ""
            row.append(text)

        data.append(row)

    return data


def parse_gamelog_table(
    table: Tag,
    log: Optional[logging.Logger] = None,
) -> Tuple[List[str], List[str], List[List[str]]]:
    """
    Parse a located gamelog table into (labels, stats, rows).
    """
    labels: List[str] = []
    stats: List[str] = []
    rows: List[List[str]] = []

    for child in element_children(table, "thead", "tbody"):
        if child.name == "thead":
            labels, stats = parse_table_headers(child, log=log)
        else:
            rows = parse_table_data(child, stats, log=log)

    return labels, stats, rows


# ===================== PLAYER NAME =====================

def get_player_name(root: Tag, log: Optional[logging.Logger] = None) -> Optional[str]:
    """
    Player name from the page heading, e.g.

        <h1 itemprop="name"><span>Trae Young 2021-22 Game Log</span></h1>

    gives "Trae Young". Returns None when the heading, its <span> or the
    season suffix is missing.
    """
    log = log or logger

    def is_name_heading(node: Tag) -> bool:
        return node.name == "h1" and get_attribute(node, "itemprop") == NAME_ITEMPROP

    heading = search(root, is_name_heading)
    if heading is None:
        return None

    span = next(element_children(heading, "span"), None)
    if span is None:
        log.debug("Name heading has no <span>: %s", heading)
        return None

    text = get_text(span)
    if not text:
        return None

    match = SEASON_SUFFIX_RE.search(text)
    if match is None:
        log.warning("No season suffix in player heading %r", text)
        return None

    return text[: match.start()]


# ===================== FULL PAGE =====================

def extract_gamelog(root: Tag, log: Optional[logging.Logger] = None) -> Optional[Gamelog]:
    """
    Run every extractor over a parsed gamelog page.
    Returns None if the page has no gamelog table; name may still be None.
    """
    table = locate_gamelog_table(root)
    if table is None:
        return None

    labels, stats, rows = parse_gamelog_table(table, log=log)
    name = get_player_name(root, log=log)
    return Gamelog(labels=labels, stats=stats, rows=rows, name=name)
