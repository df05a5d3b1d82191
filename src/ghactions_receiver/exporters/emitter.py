# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Emitters hand finished traces to a downstream sink.

The core calls :meth:`Emitter.accept` once per delivery and never retries;
buffering and retry belong to the sink (e.g. the OTLP exporter).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from opentelemetry import trace as trace_api
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from opentelemetry.sdk.util.instrumentation import InstrumentationScope
from opentelemetry.trace import Status, StatusCode

from ghactions_receiver._version import __version__
from ghactions_receiver.models.trace import Span, Trace
from ghactions_receiver.receiver.errors import DownstreamConsumeError

logger = logging.getLogger(__name__)

_SCOPE = InstrumentationScope("ghactions_receiver", __version__)


class Emitter(Protocol):
    """Downstream sink for finished traces."""

    def accept(self, trace: Trace) -> None:
        """Consume *trace*.

        Raises:
            DownstreamConsumeError: If the sink rejected the trace.
        """
        ...


def to_readable_spans(trace: Trace) -> List[ReadableSpan]:
    """Convert a trace document into OpenTelemetry SDK spans."""
    return [_to_readable_span(span, trace) for span in trace.spans]


def _to_readable_span(span: Span, trace: Trace) -> ReadableSpan:
    trace_id = int.from_bytes(span.trace_id, "big")
    context = trace_api.SpanContext(
        trace_id=trace_id,
        span_id=int.from_bytes(span.span_id, "big"),
        is_remote=False,
        trace_flags=trace_api.TraceFlags(trace_api.TraceFlags.SAMPLED),
    )
    parent = None
    if span.parent_span_id:
        parent = trace_api.SpanContext(
            trace_id=trace_id,
            span_id=int.from_bytes(span.parent_span_id, "big"),
            is_remote=True,
        )

    # The SDK only keeps descriptions on error statuses.
    description = span.status_message if span.status_code is StatusCode.ERROR else None

    return ReadableSpan(
        name=span.name,
        context=context,
        parent=parent,
        resource=trace.resource,
        kind=span.kind,
        status=Status(span.status_code, description),
        start_time=span.start_time_unix_nano,
        end_time=span.end_time_unix_nano,
        instrumentation_scope=_SCOPE,
    )


class SpanExporterEmitter:
    """Emits traces through an OpenTelemetry :class:`SpanExporter`.

    Example::

        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

        emitter = SpanExporterEmitter(OTLPSpanExporter(endpoint="http://collector:4318/v1/traces"))
    """

    def __init__(self, exporter: SpanExporter) -> None:
        self._exporter = exporter

    @property
    def exporter(self) -> SpanExporter:
        return self._exporter

    def accept(self, trace: Trace) -> None:
        if not trace.spans:
            logger.debug("Trace has no spans, nothing to export")
            return

        spans: Sequence[ReadableSpan] = to_readable_spans(trace)
        try:
            result = self._exporter.export(spans)
        except Exception as exc:
            logger.error("Failed to export traces: %s", exc)
            raise DownstreamConsumeError(f"exporter raised: {exc}") from exc

        if result is not SpanExportResult.SUCCESS:
            logger.error("Failed to export traces: exporter returned %s", result.name)
            raise DownstreamConsumeError(f"exporter returned {result.name}")

    def shutdown(self) -> None:
        self._exporter.shutdown()


class InMemoryEmitter:
    """Keeps accepted traces in memory."""

    def __init__(self, fail_with: Optional[str] = None) -> None:
        self.traces: List[Trace] = []
        self._fail_with = fail_with

    def accept(self, trace: Trace) -> None:
        if self._fail_with:
            raise DownstreamConsumeError(self._fail_with)
        self.traces.append(trace)

    def clear(self) -> None:
        self.traces.clear()
