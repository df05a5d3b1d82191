# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Receiver self-observability."""

from __future__ import annotations

from ghactions_receiver.tracking.metrics import record_event

__all__ = ["record_event"]
