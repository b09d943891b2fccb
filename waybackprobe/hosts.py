"""Internet Archive hosts and path conventions."""

IA_ROOT = "http://web.archive.org"
IA_BETA = "http://web-beta.archive.org"

IA_SROOT = "https://web.archive.org"
IA_SBETA = "https://web-beta.archive.org"

ARCHIVE_PREFIXES = (IA_ROOT, IA_BETA, IA_SROOT, IA_SBETA)

IA_WEB = "/web/"    # e.g. http://web.archive.org/web/20161104020243/http://example.com/
IA_SAVE = "/save/"  # e.g. https://web.archive.org/save/http://www.bbc.com/news

WEB_PREFIXES = tuple(prefix + IA_WEB for prefix in ARCHIVE_PREFIXES)


def is_wayback(link: str) -> bool:
    """Return True if ``link`` already points into the Wayback Machine."""
    return any(prefix in link for prefix in ARCHIVE_PREFIXES)
