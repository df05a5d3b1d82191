# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""TraceBuilder — converts one decoded webhook event into a trace.

Span tree per run attempt::

    workflow_run span          (ID = run_parent_span_id, no parent)
    └── job span               (ID = job_span_id, parent = run_parent_span_id)
        ├── step span          (random ID, parent = job span)
        └── step span

``workflow_job`` and ``workflow_run`` deliveries arrive independently; each
one emits only its own part of the tree, and the deterministic IDs stitch
the parts together downstream.  Spans are only produced for completed
jobs and runs.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Union

from opentelemetry.sdk.resources import Resource
from opentelemetry.trace import SpanKind, StatusCode
from typing_extensions import assert_never

from ghactions_receiver.models.events import (
    ClassifiedEvent,
    JobEvent,
    RunEvent,
    Step,
    WorkflowJob,
    WorkflowJobEvent,
    WorkflowRunEvent,
)
from ghactions_receiver.models.trace import Span, Trace, to_unix_nano
from ghactions_receiver.receiver import ids
from ghactions_receiver.receiver.service_name import resolve_service_name
from ghactions_receiver.sdk.config import ReceiverConfig

COMPLETED = "completed"
SUCCESS = "success"
FAILURE = "failure"

AttributeValue = Union[str, int]


def conclusion_status(conclusion: str) -> StatusCode:
    """Map a GitHub conclusion to a span status code."""
    if conclusion == SUCCESS:
        return StatusCode.OK
    if conclusion == FAILURE:
        return StatusCode.ERROR
    return StatusCode.UNSET


def aggregate_step_status(steps: Sequence[Step]) -> StatusCode:
    """Status of a job span derived from its steps.

    Any failed step makes the job an error.  The job is OK only if every
    step completed successfully; anything else (skipped, cancelled, still
    running) leaves it unset.
    """
    all_successful = True
    for step in steps:
        if step.conclusion == FAILURE:
            return StatusCode.ERROR
        if step.status != COMPLETED or step.conclusion != SUCCESS:
            all_successful = False
    return StatusCode.OK if all_successful else StatusCode.UNSET


class TraceBuilder:
    """Builds :class:`~ghactions_receiver.models.trace.Trace` documents.

    Holds only immutable configuration, so a single instance may be shared
    across concurrent conversions.

    Args:
        config: Receiver configuration (service-name overrides).
        span_ids: Source of random step span IDs.
        logger: Diagnostics sink.  Receives structured events only.
    """

    def __init__(
        self,
        config: Optional[ReceiverConfig] = None,
        span_ids: Optional[ids.StepSpanIdSource] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or ReceiverConfig()
        self._span_ids = span_ids or ids.StepSpanIdSource()
        self._logger = logger or logging.getLogger(__name__)

    def build(self, event: ClassifiedEvent) -> Trace:
        """Convert *event* into a trace.

        Raises:
            IdentifierDerivationError: If an identifier cannot be derived;
                no partial trace is returned.
        """
        if isinstance(event, JobEvent):
            return self._build_job_trace(event.payload)
        if isinstance(event, RunEvent):
            return self._build_run_trace(event.payload)
        assert_never(event)

    # ------------------------------------------------------------------
    # workflow_job
    # ------------------------------------------------------------------

    def _build_job_trace(self, event: WorkflowJobEvent) -> Trace:
        job = event.workflow_job
        self._logger.info("Processing workflow_job event: job=%s run_id=%s", job.name, job.run_id)

        trace_id = ids.trace_id(job.run_id, job.run_attempt)
        resource = self._job_resource(event)

        if job.status != COMPLETED:
            self._logger.debug("Job %s is %s, not emitting spans", job.name, job.status)
            return Trace(resource=resource)

        parent_span_id = ids.run_parent_span_id(job.run_id, job.run_attempt)
        job_span = self._job_span(job, trace_id, parent_span_id)

        spans: List[Span] = [job_span]
        for step in job.steps:
            self._logger.debug("Processing step span: %s", step.name)
            spans.append(
                Span(
                    trace_id=trace_id,
                    span_id=self._span_ids.next_span_id(),
                    parent_span_id=job_span.span_id,
                    name=step.name,
                    kind=SpanKind.SERVER,
                    start_time_unix_nano=to_unix_nano(step.started_at),
                    end_time_unix_nano=to_unix_nano(step.completed_at),
                    status_code=conclusion_status(step.conclusion),
                    status_message=step.conclusion,
                )
            )

        return Trace(resource=resource, spans=spans)

    def _job_span(self, job: WorkflowJob, trace_id: bytes, parent_span_id: bytes) -> Span:
        self._logger.info("Creating job span: %s", job.name)
        if job.steps:
            start, end = job.steps[0].started_at, job.steps[-1].completed_at
        else:
            self._logger.warning("No steps found for job %s, defaulting to job times", job.name)
            start, end = job.created_at, job.completed_at

        return Span(
            trace_id=trace_id,
            span_id=ids.job_span_id(job.run_id, job.run_attempt, job.name),
            parent_span_id=parent_span_id,
            name=job.name,
            kind=SpanKind.SERVER,
            start_time_unix_nano=to_unix_nano(start),
            end_time_unix_nano=to_unix_nano(end),
            status_code=aggregate_step_status(job.steps),
        )

    def _job_resource(self, event: WorkflowJobEvent) -> Resource:
        job = event.workflow_job
        attrs: Dict[str, AttributeValue] = {
            "service.name": self._service_name(event.repository.full_name),
            "ci.system": "github",
            "ci.actor": event.repository.owner.login,
            "ci.github.job": job.name,
            "ci.github.run_id": job.run_id,
            "ci.github.run_attempt": job.run_attempt,
            "ci.github.runner.name": job.runner_name,
            "ci.github.workflow": job.workflow_name,
            "scm.system": "git",
            "scm.git.branch": job.head_branch,
            "scm.git.sha": job.head_sha,
            "scm.git.repo": event.repository.full_name,
        }
        return Resource(attrs)

    # ------------------------------------------------------------------
    # workflow_run
    # ------------------------------------------------------------------

    def _build_run_trace(self, event: WorkflowRunEvent) -> Trace:
        run = event.workflow_run
        self._logger.info("Processing workflow_run event: run=%s id=%s", run.name, run.id)

        trace_id = ids.trace_id(run.id, run.run_attempt)
        resource = self._run_resource(event)

        if run.status != COMPLETED:
            self._logger.debug("Run %s is %s, not emitting spans", run.name, run.status)
            return Trace(resource=resource)

        self._logger.info("Creating root span: %s", run.name)
        root = Span(
            trace_id=trace_id,
            span_id=ids.run_parent_span_id(run.id, run.run_attempt),
            parent_span_id=None,
            name=run.name,
            kind=SpanKind.SERVER,
            start_time_unix_nano=to_unix_nano(run.run_started_at),
            end_time_unix_nano=to_unix_nano(run.updated_at),
            status_code=conclusion_status(run.conclusion),
            status_message=run.conclusion,
        )
        return Trace(resource=resource, spans=[root])

    def _run_resource(self, event: WorkflowRunEvent) -> Resource:
        run = event.workflow_run
        attrs: Dict[str, AttributeValue] = {
            "service.name": self._service_name(event.repository.full_name),
            "ci.system": "github",
            "ci.actor": run.repository.owner.login,
            "ci.github.run_id": run.id,
            "ci.github.run_attempt": run.run_attempt,
            "ci.github.workflow": run.name,
            "ci.github.workflow_path": run.path,
            "scm.system": "git",
            "scm.git.branch": run.head_branch,
            "scm.git.sha": run.head_sha,
            "scm.git.repo": event.repository.full_name,
        }
        return Resource(attrs)

    def _service_name(self, repo_full_name: str) -> str:
        cfg = self._config
        return resolve_service_name(
            cfg.custom_service_name or "",
            cfg.service_name_prefix or "",
            cfg.service_name_suffix or "",
            repo_full_name,
        )
