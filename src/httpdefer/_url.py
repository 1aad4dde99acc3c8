"""
Base URL and path joining
"""

from typing import Optional


def compose_url(base_url: Optional[str], path: str) -> str:
    """Join ``base_url`` and ``path`` with exactly one ``/`` between them.

    Args:
        base_url: Client base URL, or None/"" for none
        path: Request path, or a full URL when there is no base URL

    Returns:
        The request URL. ``path`` is returned unchanged without a base URL,
        and ``base_url`` unchanged for an empty path.

    Example:
        >>> compose_url("http://a.com/", "/b")
        'http://a.com/b'
        >>> compose_url("http://a.com", "b")
        'http://a.com/b'
    """
    if not base_url:
        return path
    if not path:
        return base_url

    base_slash = base_url.endswith("/")
    path_slash = path.startswith("/")

    if base_slash and path_slash:
        return base_url + path[1:]
    if base_slash or path_slash:
        return base_url + path
    return f"{base_url}/{path}"
