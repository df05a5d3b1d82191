# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Receiver process wiring."""

from __future__ import annotations

from ghactions_receiver.sdk.config import ReceiverConfig

__all__ = ["ReceiverConfig"]
