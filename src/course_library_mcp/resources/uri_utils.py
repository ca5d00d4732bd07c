"""URI Utilities for MCP Resources

Parsing and building of ``library://`` resource URIs.

MCP URI STRUCTURE:
- Scheme: Always "library://"
- Path: Hierarchical, e.g. "/authors/{author_id}/courses/{course_id}"
- Query: Optional collection parameters, e.g. "?orderBy=name&pageNumber=2"

Links handed to clients are built here too, so parsing and building agree on
the same format.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote, urlencode, urlparse
from uuid import UUID

LIBRARY_SCHEME = "library"


class URIParseError(ValueError):
    """Raised when a URI cannot be parsed according to expected format."""


def parse_library_uri(uri: str) -> list[str]:
    """Parse a library:// URI into its path components.

    urlparse treats "library://authors/123" as having "authors" as the
    netloc, so the full path is rebuilt from netloc + path. The query string
    is ignored.

    Args:
        uri: Full MCP resource URI (e.g., "library://authors/7c4b...")

    Returns:
        List of path components (e.g., ["authors", "7c4b..."])

    Raises:
        URIParseError: If the URI is malformed or uses wrong scheme
    """
    try:
        parsed = urlparse(uri)
    except ValueError as e:
        raise URIParseError(f"Failed to parse URI '{uri}': {e}") from e

    if parsed.scheme != LIBRARY_SCHEME:
        raise URIParseError(
            f"Invalid URI scheme '{parsed.scheme}'. "
            f"Expected 'library://' but got '{parsed.scheme}://'"
        )

    if parsed.netloc and parsed.path:
        full_path = f"{parsed.netloc}{parsed.path}"
    elif parsed.netloc:
        # library://authors
        full_path = parsed.netloc
    elif parsed.path:
        # library:///authors/{id}
        full_path = parsed.path.lstrip("/")
    else:
        raise URIParseError(f"No path found in URI: {uri}")

    components = [part for part in full_path.split("/") if part]
    if not components:
        raise URIParseError(f"Empty path in URI: {uri}")

    return components


def build_library_uri(*path: Any, query: Mapping[str, Any] | None = None) -> str:
    """Build a library:// URI from path segments and query parameters.

    Query parameters whose value is None are left out, so optional
    collection parameters only appear when set.

    Examples:
        >>> build_library_uri("authors", query={"pageNumber": 2, "fields": None})
        "library://authors?pageNumber=2"
    """
    uri = f"{LIBRARY_SCHEME}://" + "/".join(str(segment) for segment in path)
    if query:
        present = {key: value for key, value in query.items() if value is not None}
        if present:
            uri += "?" + urlencode(present)
    return uri


def parse_uuid(value: str, parameter_name: str = "id") -> UUID:
    """Parse a UUID path parameter.

    Raises:
        URIParseError: If the value is not a UUID
    """
    try:
        return UUID(value.strip())
    except ValueError as e:
        raise URIParseError(f"Invalid {parameter_name}: {value!r}") from e


def parse_author_ids(value: str) -> list[UUID]:
    """Parse an author collection key such as ``(id1,id2)``.

    The parentheses are optional. Empty entries are ignored.

    Raises:
        URIParseError: If no ids are given or one of them is not a UUID
    """
    inner = unquote(value).strip()
    if inner.startswith("(") and inner.endswith(")"):
        inner = inner[1:-1]

    ids = [parse_uuid(part, "author id") for part in inner.split(",") if part.strip()]
    if not ids:
        raise URIParseError(f"No author ids in {value!r}")
    return ids


def format_author_ids(author_ids: list[UUID]) -> str:
    """Inverse of parse_author_ids: ``(id1,id2)``."""
    return "(" + ",".join(str(author_id) for author_id in author_ids) + ")"
