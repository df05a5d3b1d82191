# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""HMAC webhook signature verification.

GitHub signs every delivery with the configured webhook secret and sends:

- ``X-Hub-Signature-256: sha256=<hex>`` (HMAC-SHA256)
- ``X-Hub-Signature: sha1=<hex>`` (legacy HMAC-SHA1)

SHA-256 takes precedence; SHA-1 is only consulted when no SHA-256 header was
sent.  Digests are compared with :func:`hmac.compare_digest`.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

SHA256_HEADER = "X-Hub-Signature-256"
SHA1_HEADER = "X-Hub-Signature"


@dataclass(frozen=True)
class SignatureScheme:
    """A header prefix paired with the hash used to compute the digest."""

    name: str
    prefix: str
    digestmod: Callable[..., Any]


SHA256 = SignatureScheme(name="sha256", prefix="sha256=", digestmod=hashlib.sha256)
SHA1 = SignatureScheme(name="sha1", prefix="sha1=", digestmod=hashlib.sha1)


def verify_signature(secret: str, header: Optional[str], body: bytes, scheme: SignatureScheme) -> bool:
    """Return ``True`` iff *header* carries the HMAC of *body* under *secret*.

    A header that is empty, shorter than the scheme prefix, or that does not
    start with it is treated as unauthenticated.
    """
    if not header or len(header) < len(scheme.prefix) or not header.startswith(scheme.prefix):
        logger.debug("Unauthorized - missing or malformed %s signature header", scheme.name)
        return False

    received = header[len(scheme.prefix) :]
    expected = hmac.new(secret.encode("utf-8"), body, scheme.digestmod).hexdigest()

    logger.debug("Comparing %s signatures: received=%s computed=%s", scheme.name, received, expected)

    return hmac.compare_digest(expected.encode("ascii"), received.encode("utf-8"))


def authenticate(
    secret: str,
    sha256_header: Optional[str],
    sha1_header: Optional[str],
    body: bytes,
    *,
    require_signature: bool = False,
) -> bool:
    """Decide whether a delivery is authentic.

    Args:
        secret: Shared webhook secret.  Empty disables verification.
        sha256_header: Value of ``X-Hub-Signature-256`` (may be empty).
        sha1_header: Value of ``X-Hub-Signature`` (may be empty).
        body: Raw request body.
        require_signature: Reject deliveries that carry neither header.

    Returns:
        ``True`` if the delivery may be processed.
    """
    if not secret:
        return True

    if sha256_header:
        return verify_signature(secret, sha256_header, body, SHA256)

    if sha1_header:
        return verify_signature(secret, sha1_header, body, SHA1)

    if require_signature:
        logger.debug("Unauthorized - no signature header on a signed receiver")
        return False

    logger.debug("No signature header present; accepting unsigned delivery")
    return True
