"""Cursor encoding and decoding for pagination.

A cursor is the ordering-key value of one entity, tagged with its type so it
decodes back to exactly the same Python value, plus the entity id that
breaks ties between equal values:

1. JSON object ``{"k": <kind>, "v": <value>, "i": <id>}`` with compact separators
2. URL-safe base64 encoded for use in URLs

Example cursor payload:
    {"k":"datetime","v":"2025-01-15T10:30:00+00:00","i":"c8d8bb12-cb2a-4f8e-8a26-4c5f5e8d2a9b"}

The ``"i"`` member is optional. A cursor without it stands for every entity
with that ordering-key value.

Encoding is deterministic, so ``decode_position(encode(x, i)) == (x, i)``
and ``encode(*decode_position(c)) == c``; decoding rejects any string that
is not in that canonical form.
"""

from __future__ import annotations

import base64
import binascii
import json
from datetime import date, datetime
from typing import Any, Literal, NamedTuple
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from starwars_service.core.exceptions import InvalidArgumentException

CursorKind = Literal["datetime", "date", "int", "str", "uuid"]


class CursorData(BaseModel):
    """Internal representation of cursor data.

    Attributes:
        kind: Type tag of the ordering-key value
        value: JSON-compatible form of the value
    """

    kind: CursorKind = Field(description="Type of the ordering-key value")
    value: int | str = Field(description="Serialized ordering-key value")

    model_config = {"frozen": True, "strict": True}

    @classmethod
    def from_value(cls, value: Any) -> CursorData:
        """Build cursor data from an ordering-key value.

        Raises:
            TypeError: If the value type cannot be carried in a cursor
        """
        # bool is an int subclass and datetime a date subclass; order matters
        if isinstance(value, bool):
            msg = "bool ordering keys are not supported in cursors"
            raise TypeError(msg)
        if isinstance(value, datetime):
            return cls(kind="datetime", value=value.isoformat())
        if isinstance(value, date):
            return cls(kind="date", value=value.isoformat())
        if isinstance(value, int):
            return cls(kind="int", value=value)
        if isinstance(value, str):
            return cls(kind="str", value=value)
        if isinstance(value, UUID):
            return cls(kind="uuid", value=str(value))
        msg = f"Unsupported ordering key type for cursor: {type(value).__name__}"
        raise TypeError(msg)

    def to_value(self) -> Any:
        """Convert back to the original ordering-key value.

        Raises:
            ValueError: If the serialized value does not match its kind
        """
        if self.kind == "int":
            if not isinstance(self.value, int):
                msg = "int cursor carries a non-integer value"
                raise ValueError(msg)
            return self.value
        if not isinstance(self.value, str):
            msg = f"{self.kind} cursor carries a non-string value"
            raise ValueError(msg)
        if self.kind == "datetime":
            return datetime.fromisoformat(self.value)
        if self.kind == "date":
            return date.fromisoformat(self.value)
        if self.kind == "uuid":
            return UUID(self.value)
        return self.value


class CursorPosition(NamedTuple):
    """Decoded cursor: ordering-key value plus the optional entity id."""

    value: Any
    id: UUID | None = None


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        cursor = CursorCodec.encode(droid.manufactured, droid.id)
        CursorCodec.decode_position(cursor) == (droid.manufactured, droid.id)  # True
    """

    @staticmethod
    def encode(value: Any, id_: UUID | None = None) -> str:
        """Encode an ordering-key value, and optionally its entity id.

        Args:
            value: datetime, date, int, str or UUID
            id_: Entity id that breaks ties between equal values

        Returns:
            URL-safe base64 encoded string
        """
        data = CursorData.from_value(value)
        payload: dict[str, Any] = {"k": data.kind, "v": data.value}
        if id_ is not None:
            payload["i"] = str(id_)
        raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=True)
        return base64.urlsafe_b64encode(raw.encode()).decode()

    @staticmethod
    def decode_position(cursor: str) -> CursorPosition:
        """Decode a cursor string back to its ordering-key value and id.

        Raises:
            InvalidArgumentException: If the cursor is malformed or was not
                produced by ``encode``
        """
        try:
            raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
            payload = json.loads(raw.decode("utf-8"))
            if not isinstance(payload, dict) or set(payload) - {"i"} != {"k", "v"}:
                msg = "unexpected cursor payload"
                raise ValueError(msg)
            value = CursorData(kind=payload["k"], value=payload["v"]).to_value()
            id_ = UUID(payload["i"]) if "i" in payload else None
        except (
            UnicodeError,
            binascii.Error,
            ValidationError,
            ValueError,
            TypeError,
            AttributeError,
        ) as exc:
            raise InvalidArgumentException(
                detail="Invalid cursor",
                type="invalid-cursor",
                extra={"cursor": cursor},
            ) from exc

        if CursorCodec.encode(value, id_) != cursor:
            raise InvalidArgumentException(
                detail="Invalid cursor",
                type="invalid-cursor",
                extra={"cursor": cursor},
            )
        return CursorPosition(value, id_)

    @staticmethod
    def decode(cursor: str) -> Any:
        """Decode a cursor string back to its ordering-key value."""
        return CursorCodec.decode_position(cursor).value

    @staticmethod
    def create_cursor(entity: Any, ordering_key: Any) -> str:
        """Create a cursor from an entity and its ordering-key extractor.

        Example:
            cursor = CursorCodec.create_cursor(droid, lambda d: d.manufactured)
        """
        return CursorCodec.encode(ordering_key(entity), getattr(entity, "id", None))


__all__ = ["CursorCodec", "CursorData", "CursorKind", "CursorPosition"]
