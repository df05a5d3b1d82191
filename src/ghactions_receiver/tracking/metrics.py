# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Receiver metrics.

- ``ghactions_receiver.events.received`` (counter): deliveries by event kind and outcome
- ``ghactions_receiver.spans.accepted`` (counter): spans handed to the sink
"""

from __future__ import annotations

import logging
from typing import Optional

from opentelemetry import metrics
from opentelemetry.metrics import Counter

logger = logging.getLogger(__name__)

_METER_NAME = "ghactions_receiver"

meter = metrics.get_meter(_METER_NAME)

_events_received_counter: Optional[Counter] = None
_spans_accepted_counter: Optional[Counter] = None


def _get_events_received_counter() -> Counter:
    global _events_received_counter
    if _events_received_counter is None:
        _events_received_counter = meter.create_counter(
            name="ghactions_receiver.events.received",
            description="Webhook deliveries processed, by event kind and outcome",
            unit="1",
        )
    return _events_received_counter


def _get_spans_accepted_counter() -> Counter:
    global _spans_accepted_counter
    if _spans_accepted_counter is None:
        _spans_accepted_counter = meter.create_counter(
            name="ghactions_receiver.spans.accepted",
            description="Spans accepted by the downstream sink",
            unit="1",
        )
    return _spans_accepted_counter


def record_event(outcome: str, event_kind: Optional[str] = None, span_count: int = 0) -> None:
    """Record one processed delivery.

    Args:
        outcome: Handler outcome (accepted/unauthenticated/malformed/downstream_failure).
        event_kind: ``workflow_job`` or ``workflow_run`` once known.
        span_count: Spans accepted by the sink for this delivery.
    """
    attrs = {"outcome": outcome, "event.kind": event_kind or "unknown"}

    try:
        _get_events_received_counter().add(1, attrs)
    except Exception as exc:
        logger.debug("Failed to record events.received metric: %s", exc)

    if span_count:
        try:
            _get_spans_accepted_counter().add(span_count, {"event.kind": attrs["event.kind"]})
        except Exception as exc:
            logger.debug("Failed to record spans.accepted metric: %s", exc)
