# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Event classification and strict decoding.

Classification only looks at the top-level keys of the payload; the full
schema is validated once the kind is known.
"""

from __future__ import annotations

import json
import logging
from enum import Enum

from pydantic import ValidationError

from ghactions_receiver.models.events import (
    ClassifiedEvent,
    JobEvent,
    RunEvent,
    WorkflowJobEvent,
    WorkflowRunEvent,
)
from ghactions_receiver.receiver.errors import MalformedPayloadError, UnrecognizedEventKindError

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    """Webhook event kinds this receiver understands."""

    JOB = "workflow_job"
    RUN = "workflow_run"


def classify(body: bytes) -> EventKind:
    """Determine the event kind from the payload's top-level keys.

    Raises:
        MalformedPayloadError: If *body* is not a JSON object.
        UnrecognizedEventKindError: If neither known key is present.
    """
    try:
        top_level = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        logger.error("Failed to unmarshal payload: %s", exc)
        raise MalformedPayloadError(f"invalid JSON payload: {exc}", cause=exc) from exc

    if not isinstance(top_level, dict):
        raise MalformedPayloadError(f"expected a JSON object, got {type(top_level).__name__}")

    if EventKind.JOB.value in top_level:
        return EventKind.JOB
    if EventKind.RUN.value in top_level:
        return EventKind.RUN

    logger.warning("Unknown event type, keys=%s", sorted(top_level)[:10])
    raise UnrecognizedEventKindError("unknown event type: no workflow_job or workflow_run key")


def decode(body: bytes) -> ClassifiedEvent:
    """Classify *body* and decode it into the matching typed event.

    Raises:
        MalformedPayloadError: Invalid JSON or schema mismatch; the
            underlying :class:`pydantic.ValidationError` is chained.
        UnrecognizedEventKindError: Unknown event kind.
    """
    kind = classify(body)

    try:
        if kind is EventKind.JOB:
            logger.info("Decoding workflow_job event")
            return JobEvent(WorkflowJobEvent.model_validate_json(body))
        logger.info("Decoding workflow_run event")
        return RunEvent(WorkflowRunEvent.model_validate_json(body))
    except ValidationError as exc:
        logger.error("Failed to decode %s event: %s", kind.value, exc.error_count())
        raise MalformedPayloadError(f"malformed {kind.value} payload: {exc}", cause=exc) from exc
