# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Downstream trace sinks."""

from ghactions_receiver.exporters.emitter import (
    Emitter,
    InMemoryEmitter,
    SpanExporterEmitter,
    to_readable_spans,
)

__all__ = ["Emitter", "InMemoryEmitter", "SpanExporterEmitter", "to_readable_spans"]
