# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Deterministic trace and span identifiers.

Run- and job-level identifiers are pure functions of the run ID, the run
attempt and (for jobs) the job name, so every delivery about the same run
attempt lands in the same trace and reuses the same job span, whichever
order the deliveries arrive in.

Step span IDs are random.  Steps have no stable key in the payload, so
redelivering a job produces new step spans.
"""

from __future__ import annotations

import binascii
import hashlib
from typing import Optional

from opentelemetry.sdk.trace.id_generator import IdGenerator, RandomIdGenerator

from ghactions_receiver.receiver.errors import IdentifierDerivationError

TRACE_ID_BYTES = 16
SPAN_ID_BYTES = 8


def _hex_digest(key: str) -> str:
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def _decode_hex(hex_str: str, size: int) -> bytes:
    try:
        raw = binascii.unhexlify(hex_str)
    except (binascii.Error, ValueError) as exc:
        raise IdentifierDerivationError(f"cannot decode identifier {hex_str!r}") from exc
    if len(raw) != size:
        raise IdentifierDerivationError(f"identifier has {len(raw)} bytes, expected {size}")
    return raw


def trace_id(run_id: int, run_attempt: int) -> bytes:
    """First 16 bytes of ``sha256(f"{run_id}{run_attempt}t")``."""
    digest = _hex_digest(f"{run_id}{run_attempt}t")
    return _decode_hex(digest[: TRACE_ID_BYTES * 2], TRACE_ID_BYTES)


def run_parent_span_id(run_id: int, run_attempt: int) -> bytes:
    """Span ID of the run-level root span.

    Job spans use it as their parent, and the ``workflow_run`` span uses it
    as its own ID.
    """
    digest = _hex_digest(f"{run_id}{run_attempt}s")
    return _decode_hex(digest[16:32], SPAN_ID_BYTES)


def job_span_id(run_id: int, run_attempt: int, job_name: str) -> bytes:
    """Span ID of a job span within a run attempt."""
    digest = _hex_digest(f"{run_id}{run_attempt}{job_name}")
    return _decode_hex(digest[16:32], SPAN_ID_BYTES)


class StepSpanIdSource:
    """Supplies random step span IDs from an OpenTelemetry ``IdGenerator``.

    Pass a deterministic generator in tests to assert exact span trees.
    """

    def __init__(self, generator: Optional[IdGenerator] = None) -> None:
        self._generator = generator or RandomIdGenerator()

    def next_span_id(self) -> bytes:
        value = self._generator.generate_span_id()
        try:
            return value.to_bytes(SPAN_ID_BYTES, "big")
        except OverflowError as exc:
            raise IdentifierDerivationError(f"span ID {value:#x} does not fit in 8 bytes") from exc
