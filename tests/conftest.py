# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Shared test fixtures for receiver tests."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any, Dict, List, Optional

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.sdk.trace.id_generator import IdGenerator

from ghactions_receiver.exporters.emitter import InMemoryEmitter
from ghactions_receiver.receiver.ids import StepSpanIdSource
from ghactions_receiver.sdk.config import ReceiverConfig

SECRET = "It's a Secret to Everybody"

T0 = "2024-05-01T12:00:00Z"
T0_PLUS_10S = "2024-05-01T12:00:10Z"
T0_PLUS_20S = "2024-05-01T12:00:20Z"


class SequentialIdGenerator(IdGenerator):
    """Hands out span IDs 1, 2, 3, ..."""

    def __init__(self) -> None:
        self._next = 0

    def generate_span_id(self) -> int:
        self._next += 1
        return self._next

    def generate_trace_id(self) -> int:
        raise NotImplementedError


def make_step(
    name: str = "build",
    status: str = "completed",
    conclusion: Optional[str] = "success",
    started_at: Optional[str] = T0,
    completed_at: Optional[str] = T0_PLUS_10S,
) -> Dict[str, Any]:
    return {
        "name": name,
        "status": status,
        "conclusion": conclusion,
        "number": 1,
        "started_at": started_at,
        "completed_at": completed_at,
    }


def make_job_payload(
    run_id: int = 12345,
    run_attempt: int = 1,
    name: str = "test",
    status: str = "completed",
    conclusion: Optional[str] = "success",
    steps: Optional[List[Dict[str, Any]]] = None,
    repo: str = "Octo-Org/Hello_World",
) -> Dict[str, Any]:
    return {
        "action": status,
        "workflow_job": {
            "id": 987654,
            "run_id": run_id,
            "run_attempt": run_attempt,
            "name": name,
            "status": status,
            "conclusion": conclusion,
            "steps": [make_step()] if steps is None else steps,
            "head_branch": "main",
            "head_sha": "d6fde92930d4715a2b49857d24b940956b26d2d3",
            "runner_name": "GitHub Actions 2",
            "workflow_name": "CI",
            "created_at": T0,
            "completed_at": T0_PLUS_20S,
            "html_url": "https://github.com/octo-org/hello-world/actions/runs/12345/job/987654",
        },
        "repository": {"full_name": repo, "owner": {"login": "octo-org"}},
        "sender": {"login": "octocat"},
    }


def make_run_payload(
    run_id: int = 12345,
    run_attempt: int = 1,
    name: str = "CI",
    status: str = "completed",
    conclusion: Optional[str] = "success",
    repo: str = "Octo-Org/Hello_World",
) -> Dict[str, Any]:
    repository = {"full_name": repo, "owner": {"login": "octo-org"}}
    return {
        "action": status,
        "workflow_run": {
            "id": run_id,
            "run_attempt": run_attempt,
            "name": name,
            "path": ".github/workflows/ci.yml",
            "status": status,
            "conclusion": conclusion,
            "head_branch": "main",
            "head_sha": "d6fde92930d4715a2b49857d24b940956b26d2d3",
            "run_started_at": T0,
            "updated_at": T0_PLUS_20S,
            "repository": repository,
        },
        "repository": repository,
    }


def to_body(payload: Dict[str, Any]) -> bytes:
    return json.dumps(payload).encode("utf-8")


def sign_sha256(body: bytes, secret: str = SECRET) -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def sign_sha1(body: bytes, secret: str = SECRET) -> str:
    return "sha1=" + hmac.new(secret.encode(), body, hashlib.sha1).hexdigest()


@pytest.fixture
def config():
    """Config with no secret and no service-name overrides."""
    return ReceiverConfig(
        secret="",
        custom_service_name="",
        service_name_prefix="",
        service_name_suffix="",
    )


@pytest.fixture
def signed_config():
    return ReceiverConfig(
        secret=SECRET,
        custom_service_name="",
        service_name_prefix="",
        service_name_suffix="",
    )


@pytest.fixture
def span_ids():
    """Deterministic step span IDs."""
    return StepSpanIdSource(SequentialIdGenerator())


@pytest.fixture
def emitter():
    return InMemoryEmitter()


@pytest.fixture
def memory_exporter():
    """In-memory span exporter for export tests."""
    exporter = InMemorySpanExporter()
    yield exporter
    exporter.clear()


@pytest.fixture
def job_payload():
    """Factory for ``workflow_job`` payload dicts."""
    return make_job_payload


@pytest.fixture
def run_payload():
    """Factory for ``workflow_run`` payload dicts."""
    return make_run_payload


@pytest.fixture
def step():
    """Factory for step dicts."""
    return make_step


@pytest.fixture
def encode():
    return to_body


@pytest.fixture
def sign():
    """Signers keyed by scheme name, using the shared test secret."""
    return {"sha256": sign_sha256, "sha1": sign_sha1}
