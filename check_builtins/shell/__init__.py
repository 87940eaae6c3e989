"""Shell introspection: where command resolution facts come from."""

from .alias_file import ALIAS_FILE_ENV, collect_alias_files, load_alias_file
from .path_search import PathSearcher, split_search_path
from .provider import (
    BashFactProvider,
    FactLookupError,
    FactProvider,
    StaticFactProvider,
    create_fact_provider,
)
from .type_parser import parse_type_output

__all__ = [
    "ALIAS_FILE_ENV",
    "collect_alias_files",
    "load_alias_file",
    "PathSearcher",
    "split_search_path",
    "BashFactProvider",
    "FactLookupError",
    "FactProvider",
    "StaticFactProvider",
    "create_fact_provider",
    "parse_type_output",
]
