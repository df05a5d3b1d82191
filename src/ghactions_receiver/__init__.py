# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""GitHub Actions event receiver - turns workflow webhooks into OpenTelemetry traces.

Quick Start::

    from ghactions_receiver import enable

    app = enable()  # reads GHA_RECEIVER_SECRET, OTEL_EXPORTER_OTLP_ENDPOINT env vars

Or drive the conversion directly::

    from ghactions_receiver import TraceBuilder, decode

    trace = TraceBuilder().build(decode(body))
"""

from __future__ import annotations

from ghactions_receiver._version import __version__

# Bootstrap
from ghactions_receiver.sdk.bootstrap import disable, enable, is_enabled

# Configuration
from ghactions_receiver.sdk.config import ReceiverConfig

# Models
from ghactions_receiver.models import ClassifiedEvent, JobEvent, RunEvent, Span, Trace

# Conversion core
from ghactions_receiver.receiver import (
    HandlerResult,
    Outcome,
    ReceiverError,
    TraceBuilder,
    WebhookHandler,
    authenticate,
    decode,
    resolve_service_name,
)

# Sinks
from ghactions_receiver.exporters import Emitter, InMemoryEmitter, SpanExporterEmitter

__all__ = [
    "__version__",
    # Bootstrap
    "enable",
    "disable",
    "is_enabled",
    # Configuration
    "ReceiverConfig",
    # Models
    "ClassifiedEvent",
    "JobEvent",
    "RunEvent",
    "Span",
    "Trace",
    # Conversion
    "TraceBuilder",
    "WebhookHandler",
    "HandlerResult",
    "Outcome",
    "ReceiverError",
    "authenticate",
    "decode",
    "resolve_service_name",
    # Sinks
    "Emitter",
    "InMemoryEmitter",
    "SpanExporterEmitter",
]
