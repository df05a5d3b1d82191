# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for webhook conversion.

Every error is terminal for the single event being processed; none of them
is fatal to the process.
"""

from __future__ import annotations

from typing import Optional


class ReceiverError(Exception):
    """Base class for all receiver errors."""


class AuthenticationError(ReceiverError):
    """Signature absent when required, or mismatched."""


class MalformedPayloadError(ReceiverError):
    """Invalid JSON, or a payload that does not match the event schema."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class UnrecognizedEventKindError(ReceiverError):
    """Neither ``workflow_job`` nor ``workflow_run`` is present."""


class IdentifierDerivationError(ReceiverError):
    """The hash / hex pipeline produced an unusable identifier."""


class DownstreamConsumeError(ReceiverError):
    """The sink rejected a successfully built trace."""
