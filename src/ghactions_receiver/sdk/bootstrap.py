# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Receiver bootstrap — wires configuration, exporter, handler and transport.

Usage::

    from ghactions_receiver import enable
    app = enable()  # reads GHA_RECEIVER_*, OTEL_EXPORTER_OTLP_* from env

The returned Starlette app can be served by any ASGI server.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from ghactions_receiver.exporters.emitter import SpanExporterEmitter
from ghactions_receiver.receiver.handler import WebhookHandler
from ghactions_receiver.sdk.config import ReceiverConfig
from ghactions_receiver.sdk.server import create_app

if TYPE_CHECKING:
    from opentelemetry.sdk.trace.export import SpanExporter
    from starlette.applications import Starlette

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_current_config: Optional[ReceiverConfig] = None
_current_emitter: Optional[SpanExporterEmitter] = None


def enable(
    config: Optional[ReceiverConfig] = None,
    config_file: Optional[str] = None,
    exporter: Optional[SpanExporter] = None,
    log_level: str = "INFO",
) -> Starlette:
    """Build the receiver application.

    Args:
        config: Full :class:`ReceiverConfig` (overrides *config_file*).
        config_file: Path to YAML config file.
        exporter: Span exporter to hand traces to (default: OTLP/HTTP).
        log_level: Logging level (default: ``"INFO"``).

    Returns:
        The Starlette application serving webhook deliveries.

    Raises:
        ValueError: If the configuration is invalid.
    """
    global _current_config, _current_emitter

    with _lock:
        if _current_emitter is not None:
            logger.warning("Receiver already enabled, replacing previous exporter")
            _current_emitter.shutdown()

        logging.basicConfig(level=getattr(logging, log_level.upper()))

        if config is not None:
            cfg = config
        elif config_file is not None:
            cfg = ReceiverConfig.from_yaml(config_file)
        else:
            cfg = ReceiverConfig.from_file_or_env()

        cfg.validate()

        if exporter is None:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

            exporter = OTLPSpanExporter(
                endpoint=cfg.otlp_endpoint,
                headers=cfg.otlp_headers or {},
                timeout=cfg.export_timeout_seconds,
            )

        emitter = SpanExporterEmitter(exporter)
        handler = WebhookHandler(cfg, emitter)

        logger.info(
            "Starting GitHub Actions event receiver: endpoint=%s%s, exporter=%s, signed=%s",
            cfg.endpoint,
            cfg.path,
            type(exporter).__name__,
            bool(cfg.secret),
        )

        _current_config = cfg
        _current_emitter = emitter
        return create_app(handler, cfg)


def get_config() -> Optional[ReceiverConfig]:
    """Get the current receiver configuration."""
    return _current_config


def is_enabled() -> bool:
    return _current_emitter is not None


def disable() -> None:
    """Shut down the exporter.  Call on application shutdown."""
    global _current_config, _current_emitter

    with _lock:
        if _current_emitter is None:
            return

        try:
            _current_emitter.shutdown()
            logger.info("Receiver shutdown complete")
        finally:
            _current_emitter = None
            _current_config = None
