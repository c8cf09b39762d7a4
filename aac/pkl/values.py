"""
Pkl literal values.

Converts the right-hand side of a `key = value` line into a typed value.
Unrecognized shapes fall through to plain strings, so a malformed literal
never aborts parsing of the surrounding file.
"""

from typing import Dict, List, Union

from aac.config.constants import PKL_PATTERNS

# Tagged value variant held by a parsed record field
PklValue = Union[str, bool, int, float, Dict[str, str]]


def _strip_quotes(text: str) -> str:
    return text.strip().strip('"')


def _call_arguments(text: str, prefix: str) -> List[str]:
    """Split the comma separated argument list of `Prefix(a, b, ...)`."""
    content = text[len(prefix):]
    if content.endswith(")"):
        content = content[:-1]
    return [part.strip() for part in content.split(",")]


def parse_map_value(text: str) -> Dict[str, str]:
    """
    Parse a `Map("k1", "v1", "k2", "v2")` literal.

    Arguments alternate key and value; a trailing key without a value is
    dropped. No escape processing is applied.

    Args:
        text: Literal starting with `Map(`

    Returns:
        String-to-string map
    """
    parts = _call_arguments(text, PKL_PATTERNS.MAP_PREFIX)
    result: Dict[str, str] = {}

    for i in range(0, len(parts) - 1, 2):
        result[_strip_quotes(parts[i])] = _strip_quotes(parts[i + 1])

    return result


def parse_listing_value(text: str) -> List[str]:
    """
    Parse a `Listing("a", "b")` literal into its quote-stripped items.

    Empty items are skipped, so `Listing()` yields an empty list.
    """
    if not text.startswith(PKL_PATTERNS.LISTING_PREFIX):
        return []
    items = [_strip_quotes(part) for part in _call_arguments(text, PKL_PATTERNS.LISTING_PREFIX)]
    return [item for item in items if item]


def parse_value(value: str) -> PklValue:
    """
    Classify and convert one literal.

    Args:
        value: Trimmed literal with any trailing comma already removed

    Returns:
        str, bool, int, float or Dict[str, str]. Dotted references such as
        `BA.customer` and anything unrecognized come back verbatim as str.
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]

    if value == "true" or value == "false":
        return value == "true"

    if PKL_PATTERNS.INTEGER.fullmatch(value):
        return int(value)

    if PKL_PATTERNS.DECIMAL.fullmatch(value):
        return float(value)

    if value.startswith(PKL_PATTERNS.MAP_PREFIX):
        return parse_map_value(value)

    # Unresolved cross-reference (e.g. BA.customer) or any other token
    return value
