"""Messages carried by the broker and their JSON wire form."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any


class MessageError(ValueError):
    """Raised for invalid messages or unparsable message text."""


@dataclass
class Metadata:
    """Identity and routing details of a message."""

    message_id: str = ""
    timestamp: str = ""
    source: str = ""
    destination: str = ""
    message_type: str = ""


@dataclass
class Headers:
    """Content description and free-form headers of a message."""

    content_type: str = ""
    content_encoding: str = ""
    custom_headers: dict[str, str] = field(default_factory=dict)


def _string(obj: Any, key: str) -> str:
    value = obj[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


@dataclass
class Message:
    """A message with metadata, headers and a JSON payload."""

    metadata: Metadata
    headers: Headers
    payload: Any = None

    def __post_init__(self) -> None:
        if not all(getattr(self.metadata, f.name) for f in fields(Metadata)):
            raise MessageError("Invalid message metadata")

    def stringify(self) -> str:
        """Serialize the message to compact JSON with sorted keys."""
        document = {
            "metadata": {
                "messageId": self.metadata.message_id,
                "timestamp": self.metadata.timestamp,
                "source": self.metadata.source,
                "destination": self.metadata.destination,
                "type": self.metadata.message_type,
            },
            "headers": {
                "contentType": self.headers.content_type,
                "contentEncoding": self.headers.content_encoding,
                "customHeaders": dict(self.headers.custom_headers),
            },
            "payload": {"data": self.payload},
        }
        return json.dumps(document, separators=(",", ":"), sort_keys=True, ensure_ascii=False)

    @classmethod
    def parse(cls, text: str) -> "Message":
        """Build a message from its JSON form; raise MessageError on failure."""
        try:
            document = json.loads(text)
            meta = document["metadata"]
            metadata = Metadata(
                message_id=_string(meta, "messageId"),
                timestamp=_string(meta, "timestamp"),
                source=_string(meta, "source"),
                destination=_string(meta, "destination"),
                message_type=_string(meta, "type"),
            )

            head = document["headers"]
            custom = head["customHeaders"]
            if not isinstance(custom, dict) or not all(
                isinstance(value, str) for value in custom.values()
            ):
                raise TypeError("'customHeaders' must map strings to strings")
            headers = Headers(
                content_type=_string(head, "contentType"),
                content_encoding=_string(head, "contentEncoding"),
                custom_headers=dict(custom),
            )

            body = document.get("payload")
            if body is None:
                payload = None
            elif isinstance(body, dict):
                payload = body.get("data")
            else:
                raise TypeError("'payload' must be an object")

            return cls(metadata, headers, payload)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise MessageError(f"Failed to parse message: {exc}") from exc