"""Include and source resolution for hypr* config files."""

from .directives import extract_include_patterns, extract_sources, parse_source_value
from .errors import CyclicIncludeError, IncludeLoadError, IncludeParseError, IncludeReadError
from .expand import expand_expression, has_glob_chars, path_matches, resolve_targets
from .includes import load_with_includes
from .merge import merge_values
from .walker import build_source_graph, collect_source_graph

__all__ = [
    "expand_expression",
    "has_glob_chars",
    "resolve_targets",
    "path_matches",
    "parse_source_value",
    "extract_sources",
    "extract_include_patterns",
    "collect_source_graph",
    "build_source_graph",
    "load_with_includes",
    "merge_values",
    "IncludeLoadError",
    "IncludeReadError",
    "IncludeParseError",
    "CyclicIncludeError",
]
