"""DSN parsing and derived request metadata."""

from urllib.parse import urlsplit

from metricflush.config import ENVELOPE_CONTENT_TYPE, SENTRY_VERSION
from metricflush.core.models import ParsedDsn
from metricflush.exceptions import InvalidDsnError

_DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_dsn(dsn: str) -> ParsedDsn:
    """Split a DSN into public key, host and project id.

    Args:
        dsn: Address of the form https://<key>@<host>/<project_id>

    Returns:
        ParsedDsn with all three components populated.

    Raises:
        InvalidDsnError: If the DSN is not a URL or a component is missing.
    """
    try:
        parts = urlsplit(dsn)
        port = parts.port
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidDsnError(f"Invalid DSN: {e}") from e

    public_key = parts.username or ""
    # host exactly as written, brackets included for IPv6
    host = parts.netloc.rpartition("@")[2] if parts.hostname else ""
    if port is not None and port == _DEFAULT_PORTS.get(parts.scheme):
        host = host.rpartition(":")[0]
    host = host.removesuffix(":")
    project_id = parts.path[1:]

    if not public_key or not host or not project_id:
        raise InvalidDsnError("Invalid DSN: missing required components")

    return ParsedDsn(public_key=public_key, host=host, project_id=project_id)


def envelope_url(parsed: ParsedDsn) -> str:
    """Build the envelope ingestion URL for a parsed DSN."""
    return f"https://{parsed.host}/api/{parsed.project_id}/envelope/"


def auth_header(parsed: ParsedDsn) -> str:
    """Build the X-Sentry-Auth header value."""
    return f"Sentry sentry_key={parsed.public_key}, sentry_version={SENTRY_VERSION}"


def request_headers(parsed: ParsedDsn) -> dict[str, str]:
    """Headers sent with every envelope."""
    return {
        "Content-Type": ENVELOPE_CONTENT_TYPE,
        "X-Sentry-Auth": auth_header(parsed),
    }
