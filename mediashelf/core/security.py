"""Input sanitising helpers for displayed values."""

from urllib.parse import urlparse

SAFE_SCHEMES = ("http", "https")
RELATIVE_PREFIXES = ("/", "./", "../")


def sanitize_url(url: str) -> str:
    """Return the URL if it is a relative path or http(s) URL, else an empty string."""
    if not url:
        return ""

    if url.startswith(RELATIVE_PREFIXES):
        return url

    try:
        parsed = urlparse(url)
    except ValueError:
        return ""

    if parsed.scheme.lower() in SAFE_SCHEMES and parsed.netloc:
        return url
    return ""
