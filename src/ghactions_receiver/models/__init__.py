# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Receiver data models."""

from __future__ import annotations

from ghactions_receiver.models.events import (
    ClassifiedEvent,
    JobEvent,
    Repository,
    RunEvent,
    Step,
    WorkflowJob,
    WorkflowJobEvent,
    WorkflowRun,
    WorkflowRunEvent,
)
from ghactions_receiver.models.trace import Span, Trace

__all__ = [
    "ClassifiedEvent",
    "JobEvent",
    "Repository",
    "RunEvent",
    "Span",
    "Step",
    "Trace",
    "WorkflowJob",
    "WorkflowJobEvent",
    "WorkflowRun",
    "WorkflowRunEvent",
]
