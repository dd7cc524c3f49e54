# bbref package
# Gamelog extraction and season crawl for basketball-reference.com

from .dom import search, get_attribute, get_text, element_children
from .gamelog import (
    Gamelog,
    locate_gamelog_table,
    parse_table_headers,
    parse_table_data,
    parse_gamelog_table,
    get_player_name,
    extract_gamelog,
)
from .output import IdGenerator, IdMapper, write_gamelog_csv
from .config import Settings, get_settings

__all__ = [
    # DOM
    "search",
    "get_attribute",
    "get_text",
    "element_children",
    # Gamelog
    "Gamelog",
    "locate_gamelog_table",
    "parse_table_headers",
    "parse_table_data",
    "parse_gamelog_table",
    "get_player_name",
    "extract_gamelog",
    # Output
    "IdGenerator",
    "IdMapper",
    "write_gamelog_csv",
    # Config
    "Settings",
    "get_settings",
]
