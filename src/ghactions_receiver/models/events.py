# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""GitHub Actions webhook payload models.

Reference: https://docs.github.com/en/webhooks/webhook-events-and-payloads

Only the fields needed to build spans are modelled; everything else in the
payload is ignored.  Nullable GitHub fields (conclusions, timestamps, runner
names on queued jobs) decode to empty values instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import AwareDatetime, BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from typing_extensions import Annotated


def _null_to_empty(value: object) -> object:
    return "" if value is None else value


# GitHub sends ``null`` for unset strings.
NullableStr = Annotated[str, BeforeValidator(_null_to_empty)]

# RFC 3339 timestamps; a timestamp without an offset is rejected.
Timestamp = Optional[AwareDatetime]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)


class Owner(_Payload):
    login: NullableStr = ""


class Repository(_Payload):
    """Repository the workflow ran for."""

    full_name: str
    owner: Owner = Field(default_factory=Owner)


class Step(_Payload):
    """A step within a workflow job; list order is execution order."""

    name: str
    status: NullableStr = ""
    conclusion: NullableStr = ""
    started_at: Timestamp = None
    completed_at: Timestamp = None


class WorkflowJob(_Payload):
    """The ``workflow_job`` object of a ``workflow_job`` delivery."""

    id: int
    run_id: int
    run_attempt: int
    name: str
    status: str
    conclusion: NullableStr = ""
    steps: Optional[List[Step]] = Field(default_factory=list)
    head_branch: NullableStr = ""
    head_sha: NullableStr = ""
    runner_name: NullableStr = ""
    workflow_name: NullableStr = ""
    created_at: Timestamp = None
    completed_at: Timestamp = None

    @field_validator("steps", mode="after")
    @classmethod
    def _null_steps(cls, value: Optional[List[Step]]) -> List[Step]:
        return value or []


class WorkflowRun(_Payload):
    """The ``workflow_run`` object of a ``workflow_run`` delivery."""

    id: int
    run_attempt: int
    name: str
    path: NullableStr = ""
    status: str
    conclusion: NullableStr = ""
    head_branch: NullableStr = ""
    head_sha: NullableStr = ""
    run_started_at: Timestamp = None
    updated_at: Timestamp = None
    repository: Repository


class WorkflowJobEvent(_Payload):
    workflow_job: WorkflowJob
    repository: Repository


class WorkflowRunEvent(_Payload):
    workflow_run: WorkflowRun
    repository: Repository


@dataclass(frozen=True)
class JobEvent:
    """A decoded ``workflow_job`` delivery."""

    payload: WorkflowJobEvent


@dataclass(frozen=True)
class RunEvent:
    """A decoded ``workflow_run`` delivery."""

    payload: WorkflowRunEvent


ClassifiedEvent = Union[JobEvent, RunEvent]
