# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Resource ``service.name`` derivation."""

from __future__ import annotations


def resolve_service_name(custom_name: str, prefix: str, suffix: str, repo_full_name: str) -> str:
    """Return the service name for a repository.

    A non-empty *custom_name* wins verbatim.  Otherwise the repository's full
    name is lower-cased with ``/`` and ``_`` replaced by ``-`` and wrapped in
    *prefix* and *suffix*.

    Example::

        >>> resolve_service_name("", "ci-", "", "Org/Repo_Name")
        'ci-org-repo-name'
    """
    if custom_name:
        return custom_name
    normalized = repo_full_name.replace("/", "-").replace("_", "-").lower()
    return f"{prefix}{normalized}{suffix}"
