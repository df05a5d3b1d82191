# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Webhook → trace conversion core."""

from __future__ import annotations

from ghactions_receiver.receiver.builder import TraceBuilder, aggregate_step_status, conclusion_status
from ghactions_receiver.receiver.classifier import EventKind, classify, decode
from ghactions_receiver.receiver.errors import (
    AuthenticationError,
    DownstreamConsumeError,
    IdentifierDerivationError,
    MalformedPayloadError,
    ReceiverError,
    UnrecognizedEventKindError,
)
from ghactions_receiver.receiver.handler import HandlerResult, Outcome, WebhookHandler
from ghactions_receiver.receiver.ids import (
    StepSpanIdSource,
    job_span_id,
    run_parent_span_id,
    trace_id,
)
from ghactions_receiver.receiver.service_name import resolve_service_name
from ghactions_receiver.receiver.signature import SHA1, SHA256, authenticate, verify_signature

__all__ = [
    "AuthenticationError",
    "DownstreamConsumeError",
    "EventKind",
    "HandlerResult",
    "IdentifierDerivationError",
    "MalformedPayloadError",
    "Outcome",
    "ReceiverError",
    "SHA1",
    "SHA256",
    "StepSpanIdSource",
    "TraceBuilder",
    "UnrecognizedEventKindError",
    "WebhookHandler",
    "aggregate_step_status",
    "authenticate",
    "classify",
    "conclusion_status",
    "decode",
    "job_span_id",
    "resolve_service_name",
    "run_parent_span_id",
    "trace_id",
    "verify_signature",
]
