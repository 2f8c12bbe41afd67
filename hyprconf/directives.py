"""Extraction of source/include directives from config files."""

from typing import Any, Iterator, List, Optional, Tuple

SOURCE_KEYWORD = "source"
DEFAULT_INCLUDE_KEY = "include"

COMMENT_CHAR = "#"
QUOTE_CHARS = ('"', "'")


def strip_comment(line: str) -> str:
    """
    Remove a trailing ``#`` comment from a config line.

    A doubled ``##`` is an escaped literal ``#`` and does not start a comment.

    Args:
        line: A single line of config text.

    Returns:
        The line up to (not including) the first unescaped ``#``.
    """
    i = 0
    while i < len(line):
        if line[i] == COMMENT_CHAR:
            if line.startswith("##", i):
                i += 2
                continue
            return line[:i]
        i += 1
    return line


def _strip_quotes(value: str) -> str:
    """Remove one layer of matching surrounding quotes."""
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_source_value(line: str, keyword: str = SOURCE_KEYWORD) -> Optional[str]:
    """
    Parse ``source = <expression>`` from a single config line.

    Args:
        line: A single line of config text.
        keyword: Directive keyword on the left-hand side (default: ``source``).

    Returns:
        The directive value, or None if the line is not a directive.
    """
    clean = strip_comment(line).strip()
    if not clean or "=" not in clean:
        return None

    lhs, rhs = clean.split("=", 1)
    if lhs.strip() != keyword:
        return None

    value = _strip_quotes(rhs.strip()).replace("##", COMMENT_CHAR)
    if not value:
        return None

    return value


def _iter_lines(content: str) -> Iterator[str]:
    """Yield lines split on newlines, each keeping its terminator."""
    lines = content.split("\n")
    for line in lines[:-1]:
        yield line + "\n"
    if lines[-1]:
        yield lines[-1]


def extract_sources(content: str, keyword: str = SOURCE_KEYWORD) -> Tuple[List[str], str]:
    """
    Extract all ``source = ...`` directives and return the remaining content.

    ``source`` is not a key a TOML parser understands at arbitrary positions,
    so the residual content is what gets handed to a structured parser.

    Args:
        content: Full text of a config file.
        keyword: Directive keyword (default: ``source``).

    Returns:
        Tuple of (directive values in file order, content without directive lines).
    """
    sources: List[str] = []
    remaining: List[str] = []

    for line in _iter_lines(content):
        value = parse_source_value(line.rstrip("\r\n"), keyword)
        if value is not None:
            sources.append(value)
            continue
        remaining.append(line)

    return sources, "".join(remaining)


def extract_include_patterns(document: Any, include_key: str = DEFAULT_INCLUDE_KEY) -> List[str]:
    """
    Collect the string entries of a top-level include array.

    Args:
        document: A parsed structured document.
        include_key: Name of the top-level include key.

    Returns:
        Include expressions in declaration order. Non-string entries are skipped.
    """
    if not isinstance(document, dict):
        return []

    includes = document.get(include_key)
    if not isinstance(includes, list):
        return []

    return [include for include in includes if isinstance(include, str)]
