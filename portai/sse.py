"""
Server-Sent Events decoding for buffered invocation responses.

The invoke endpoints answer with an SSE body even though the call is
made as a plain request/response. The whole body is decoded at once:

    event: invocationIdentifier
    data: abc-123

    event: execution
    data: step 1 done

    event: done
    data: {"ok": true}

Blocks without an event type or without data are dropped; the decoder
never raises on malformed input.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

EVENT_PREFIX = "event: "
DATA_PREFIX = "data: "

EVENT_INVOCATION_IDENTIFIER = "invocationIdentifier"
EVENT_EXECUTION = "execution"
EVENT_DONE = "done"


@dataclass
class SSEEvent:
    """A single decoded event."""
    type: str
    data: str


@dataclass
class ParsedInvocationResult:
    """Structured view of an invocation's SSE response."""
    invocation_identifier: Optional[str] = None
    events: List[SSEEvent] = field(default_factory=list)
    execution_messages: List[str] = field(default_factory=list)
    final_data: Any = None

    @property
    def execution_message(self) -> str:
        """All execution messages, newline-joined."""
        return "\n".join(self.execution_messages)

    @property
    def data(self) -> str:
        """Data of every event in arrival order, newline-joined."""
        return "\n".join(e.data for e in self.events)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "invocationIdentifier": self.invocation_identifier,
            "events": [{"type": e.type, "data": e.data} for e in self.events],
            "executionMessages": list(self.execution_messages),
            "finalData": self.final_data,
            "executionMessage": self.execution_message,
            "data": self.data,
        }


def extract_response_text(body: Any) -> str:
    """
    Normalize a response body into SSE text.

    Strings pass through, bytes are decoded, a list of chunks is
    rejoined on blank lines and anything else is serialized as JSON.
    """
    if isinstance(body, str):
        return body
    if isinstance(body, (bytes, bytearray)):
        return body.decode("utf-8", errors="replace")
    if isinstance(body, list):
        return "\n\n".join(str(chunk) for chunk in body)
    return json.dumps(body)


def _parse_block(block: str) -> Optional[SSEEvent]:
    event_type = None
    data_lines = []

    for line in block.split("\n"):
        if line.startswith(EVENT_PREFIX):
            event_type = line[len(EVENT_PREFIX):].strip()
        elif line.startswith(DATA_PREFIX):
            data_lines.append(line[len(DATA_PREFIX):].strip())

    # Multiple data lines form one value (SSE framing)
    data = "\n".join(data_lines)

    if not event_type or not data:
        return None
    return SSEEvent(type=event_type, data=data)


def parse_sse_response(sse_text: str) -> ParsedInvocationResult:
    """Decode a complete SSE body into a ParsedInvocationResult."""
    result = ParsedInvocationResult()
    blocks = [b for b in sse_text.split("\n\n") if b.strip()]
    dropped = 0

    for block in blocks:
        event = _parse_block(block)
        if event is None:
            dropped += 1
            continue

        if event.type == EVENT_INVOCATION_IDENTIFIER:
            result.invocation_identifier = event.data
        elif event.type == EVENT_EXECUTION:
            result.execution_messages.append(event.data)
        elif event.type == EVENT_DONE:
            try:
                result.final_data = json.loads(event.data)
            except json.JSONDecodeError:
                result.final_data = event.data

        result.events.append(event)

    if dropped:
        logger.debug(f"Dropped {dropped} SSE block(s) without event type or data")
    logger.debug(f"Decoded {len(result.events)} SSE event(s)")

    return result
