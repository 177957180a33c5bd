"""
Default human-readable status lines for tool calls.

Rules are keyed by exact tool name. Anything not listed falls back to
"Performing <humanized name>...".
"""
import posixpath
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlsplit

from solid_agent.concerns.naming import humanize

DEFAULT_URL_MAX_LENGTH = 50
ELLIPSIS = "..."


def truncate_url(url: str, max_length: int = DEFAULT_URL_MAX_LENGTH) -> str:
    """
    Shorten a URL for display.

    Returns the URL when it fits, else its host when that fits, else the
    first ``max_length`` characters followed by "...".

    Example:
        >>> truncate_url("https://example.com/a/very/long/path", max_length=25)
        'example.com'
    """
    url = str(url)
    if len(url) <= max_length:
        return url

    try:
        host = urlsplit(url).hostname
    except ValueError:
        host = None

    if host and len(host) <= max_length:
        return host
    return url[:max_length] + ELLIPSIS


def _navigate(args: Mapping[str, Any], max_length: int) -> str:
    url = args.get("url")
    if url:
        return f"Visiting {truncate_url(url, max_length)}..."
    return "Navigating to page..."


def _click(args: Mapping[str, Any], max_length: int) -> str:
    text = args.get("text")
    if text:
        return f"Clicking '{text}'..."
    return "Clicking element..."


def _fill_form(args: Mapping[str, Any], max_length: int) -> str:
    return f"Filling in {args.get('field') or 'form field'}..."


def _read_page(args: Mapping[str, Any], max_length: int) -> str:
    return "Reading page content..."


def _search(args: Mapping[str, Any], max_length: int) -> str:
    query = args.get("query")
    if query:
        return f"Searching for '{query}'..."
    return "Searching..."


def _read_file(args: Mapping[str, Any], max_length: int) -> str:
    path = args.get("path")
    if path:
        return f"Reading {posixpath.basename(str(path))}..."
    return "Reading file..."


DEFAULT_DESCRIPTIONS: Dict[str, Callable[[Mapping[str, Any], int], str]] = {
    "navigate": _navigate,
    "click": _click,
    "fill_form": _fill_form,
    "extract_text": _read_page,
    "extract_main_content": _read_page,
    "search": _search,
    "read_file": _read_file,
}


def default_tool_description(
    tool_name: str,
    args: Optional[Mapping[str, Any]] = None,
    max_length: int = DEFAULT_URL_MAX_LENGTH,
) -> str:
    """
    Status line for a tool call without a configured description.

    Example:
        >>> default_tool_description("search", {"query": "python"})
        "Searching for 'python'..."
        >>> default_tool_description("custom_tool", {})
        'Performing custom tool...'
    """
    rule = DEFAULT_DESCRIPTIONS.get(str(tool_name))
    if rule is None:
        return f"Performing {humanize(str(tool_name)).lower()}..."
    return rule(args or {}, max_length)
