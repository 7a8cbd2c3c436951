"""URL helpers."""
from urllib.parse import urlsplit


def absolute_url(base_url: str, url: str) -> str:
    """Resolve ``url`` against ``base_url`` unless it is already absolute."""
    if urlsplit(url).scheme:
        return url
    return base_url.rstrip("/") + "/" + url.lstrip("/")
