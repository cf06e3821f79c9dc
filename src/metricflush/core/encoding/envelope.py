"""Envelope encoder for batches of metric records."""

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from metricflush.config import ITEM_CONTENT_TYPE, ITEM_TYPE
from metricflush.core.models import EncodedRecord


def _dumps(obj: dict[str, Any]) -> str:
    return json.dumps(obj, separators=(",", ":"), allow_nan=False)


def format_sent_at(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds and a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def encode_envelope(
    records: Sequence[EncodedRecord],
    dsn: str,
    sent_at: datetime | None = None,
) -> str:
    """Encode a batch of records as a three-line envelope.

    Args:
        records: Records to send, in recording order.
        dsn: The DSN string, echoed in the envelope header.
        sent_at: Send time. Defaults to now.

    Returns:
        Envelope header, item header and item body as JSON documents joined
        by newlines. There is no trailing newline.
    """
    if sent_at is None:
        sent_at = datetime.now(timezone.utc)

    header = _dumps({"dsn": dsn, "sent_at": format_sent_at(sent_at)})
    item_header = _dumps(
        {
            "type": ITEM_TYPE,
            "item_count": len(records),
            "content_type": ITEM_CONTENT_TYPE,
        }
    )
    item_payload = _dumps({"items": [record.to_dict() for record in records]})

    return "\n".join([header, item_header, item_payload])
