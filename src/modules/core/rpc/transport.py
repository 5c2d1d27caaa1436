"""Length-prefixed JSON framing for the TCP transport.

Every message on the wire is ``<length>#<json>``, where ``<length>`` is
the number of UTF-16 code units in the JSON text that follows (the
``string.length`` a JavaScript peer computes).  Outgoing JSON is
ASCII-only, so for our own frames the length is also the byte count.
"""

from __future__ import annotations

import codecs
import json
from typing import Any, List, Tuple

DELIMITER = "#"
UTF16 = "utf-16-le"


class CorruptedPacketLength(Exception):
    """The length prefix of a frame is not a decimal integer."""

    def __init__(self, raw_length: str) -> None:
        super().__init__(f"Corrupted length value {raw_length!r} supplied in a packet")
        self.raw_length = raw_length


class InvalidJSONFormat(Exception):
    """The body of a frame is not valid JSON."""

    def __init__(self, body: str) -> None:
        super().__init__(f"Could not parse JSON value in a packet: {body[:80]!r}")
        self.body = body


def encode_message(message: Any) -> bytes:
    """Serialize ``message`` into a single wire frame."""
    body = json.dumps(message, separators=(",", ":"))
    return f"{len(body)}{DELIMITER}{body}".encode("ascii")


class FrameDecoder:
    """Incremental decoder that turns a TCP byte stream into JSON messages.

    Bytes may arrive split at arbitrary points (even inside a multi-byte
    UTF-8 sequence); ``feed`` buffers whatever is incomplete and returns
    only the messages that are fully available.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, data: bytes) -> List[Any]:
        self._buffer += self._decoder.decode(data)
        messages: List[Any] = []

        while self._buffer:
            index = self._buffer.find(DELIMITER)
            if index == -1:
                if not self._buffer.isdigit():
                    raise CorruptedPacketLength(self._buffer)
                break

            raw_length = self._buffer[:index]
            if not raw_length.isdigit():
                raise CorruptedPacketLength(raw_length)

            length = int(raw_length)
            units = self._buffer[index + 1 :].encode(UTF16)
            if len(units) // 2 < length:
                break

            body, self._buffer = _split_units(units, length)
            try:
                messages.append(json.loads(body))
            except ValueError as exc:
                raise InvalidJSONFormat(body) from exc

        return messages


def _split_units(units: bytes, length: int) -> Tuple[str, str]:
    """Split UTF-16 encoded text after ``length`` code units."""
    head, tail = units[: length * 2], units[length * 2 :]
    try:
        return head.decode(UTF16), tail.decode(UTF16)
    except UnicodeDecodeError as exc:
        # The prefix ends inside a surrogate pair.
        raise InvalidJSONFormat(head.decode(UTF16, errors="replace")) from exc
