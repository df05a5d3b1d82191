# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Trace document produced from a single webhook delivery.

Identifiers are raw bytes (16-byte trace IDs, 8-byte span IDs) and
timestamps are nanoseconds since the Unix epoch, matching the OTLP wire
representation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from opentelemetry.sdk.resources import Resource
from opentelemetry.trace import SpanKind, StatusCode


def to_unix_nano(value: Optional[datetime]) -> int:
    """Convert an aware timestamp to Unix nanoseconds; missing timestamps map to 0."""
    if value is None:
        return 0
    seconds = int(value.timestamp())
    return seconds * 1_000_000_000 + value.microsecond * 1_000


@dataclass(frozen=True)
class Span:
    """A named, timed operation linked to an optional parent."""

    trace_id: bytes
    span_id: bytes
    name: str
    start_time_unix_nano: int
    end_time_unix_nano: int
    parent_span_id: Optional[bytes] = None
    kind: SpanKind = SpanKind.SERVER
    status_code: StatusCode = StatusCode.UNSET
    status_message: str = ""

    @property
    def is_root(self) -> bool:
        return not self.parent_span_id


@dataclass
class Trace:
    """One resource plus its spans, in emission order."""

    resource: Resource = field(default_factory=Resource.get_empty)
    spans: List[Span] = field(default_factory=list)

    @property
    def span_count(self) -> int:
        return len(self.spans)
