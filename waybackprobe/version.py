"""Library version and the default User-Agent derived from it."""

__version__ = "0.1.0"

DEFAULT_USER_AGENT = f"waybackprobe/{__version__}"


def version() -> str:
    """Return the agent string sent when the caller supplies none."""
    return DEFAULT_USER_AGENT
