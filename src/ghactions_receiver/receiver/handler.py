# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""WebhookHandler — the receive pipeline for one delivery.

    headers + body → authenticate → classify/decode → build → emit

Each call is independent and synchronous.  The handler returns an outcome
instead of raising so transports can map it to a response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Mapping, Optional

from ghactions_receiver.models.events import JobEvent
from ghactions_receiver.models.trace import Trace
from ghactions_receiver.receiver.builder import TraceBuilder
from ghactions_receiver.receiver.classifier import EventKind, decode
from ghactions_receiver.receiver.errors import (
    AuthenticationError,
    IdentifierDerivationError,
    MalformedPayloadError,
    UnrecognizedEventKindError,
)
from ghactions_receiver.receiver.signature import SHA1_HEADER, SHA256_HEADER, authenticate
from ghactions_receiver.sdk.config import ReceiverConfig
from ghactions_receiver.tracking.metrics import record_event

if TYPE_CHECKING:
    from ghactions_receiver.exporters.emitter import Emitter

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    """Result of handling one delivery."""

    ACCEPTED = "accepted"
    UNAUTHENTICATED = "unauthenticated"
    MALFORMED = "malformed"
    DOWNSTREAM_FAILURE = "downstream_failure"


@dataclass(frozen=True)
class HandlerResult:
    outcome: Outcome
    trace: Optional[Trace] = None
    detail: str = ""
    error: Optional[Exception] = None


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return ""


class WebhookHandler:
    """Authenticates, converts and emits webhook deliveries.

    Args:
        config: Receiver configuration.
        emitter: Downstream sink for built traces.
        builder: Trace builder; defaults to one built from *config*.
    """

    def __init__(
        self,
        config: ReceiverConfig,
        emitter: Emitter,
        builder: Optional[TraceBuilder] = None,
    ) -> None:
        self._config = config
        self._emitter = emitter
        self._builder = builder or TraceBuilder(config)

    def handle(self, headers: Mapping[str, str], body: bytes) -> HandlerResult:
        """Process one delivery and report its outcome."""
        try:
            self._authenticate(headers, body)
        except AuthenticationError as exc:
            logger.debug("Unauthorized - %s", exc)
            record_event(Outcome.UNAUTHENTICATED.value)
            return HandlerResult(Outcome.UNAUTHENTICATED, detail="Unauthorized", error=exc)

        logger.debug("Received request, %d bytes", len(body))

        event_kind: Optional[str] = None
        try:
            event = decode(body)
            event_kind = EventKind.JOB.value if isinstance(event, JobEvent) else EventKind.RUN.value
            trace = self._builder.build(event)
        except (MalformedPayloadError, UnrecognizedEventKindError, IdentifierDerivationError) as exc:
            logger.error("Failed to convert event to traces: %s", exc)
            record_event(Outcome.MALFORMED.value, event_kind)
            return HandlerResult(Outcome.MALFORMED, detail=str(exc), error=exc)

        logger.info("Unmarshaled spans: %d", trace.span_count)

        try:
            self._emitter.accept(trace)
        except Exception as exc:
            logger.error("Failed to process traces: %s", exc)
            record_event(Outcome.DOWNSTREAM_FAILURE.value, event_kind)
            return HandlerResult(Outcome.DOWNSTREAM_FAILURE, detail="Failed to process traces", error=exc)

        record_event(Outcome.ACCEPTED.value, event_kind, trace.span_count)
        return HandlerResult(Outcome.ACCEPTED, trace=trace)

    def _authenticate(self, headers: Mapping[str, str], body: bytes) -> None:
        ok = authenticate(
            self._config.secret or "",
            _header(headers, SHA256_HEADER),
            _header(headers, SHA1_HEADER),
            body,
            require_signature=bool(self._config.require_signature),
        )
        if not ok:
            raise AuthenticationError("signature mismatch or missing")
