# SPDX-FileCopyrightText: 2026 The Botanu Authors
# SPDX-License-Identifier: Apache-2.0

"""Starlette transport for GitHub webhook deliveries.

Only ``POST`` on the configured path is served, and only for requests whose
``User-Agent`` identifies GitHub's webhook sender.  Handler outcomes map to:

- accepted → 202
- unauthenticated → 401
- malformed → 400
- downstream failure → 500
"""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from ghactions_receiver.receiver.handler import Outcome, WebhookHandler
from ghactions_receiver.sdk.config import DEFAULT_PATH, ReceiverConfig

GITHUB_USER_AGENT_PREFIX = "GitHub-Hookshot"

_STATUS_CODES = {
    Outcome.ACCEPTED: 202,
    Outcome.UNAUTHENTICATED: 401,
    Outcome.MALFORMED: 400,
    Outcome.DOWNSTREAM_FAILURE: 500,
}


def create_app(handler: WebhookHandler, config: ReceiverConfig) -> Starlette:
    """Build the Starlette application serving *handler* on ``config.path``.

    Example::

        import uvicorn

        app = create_app(handler, config)
        uvicorn.run(app, host=config.host, port=config.port)
    """
    path = config.path or DEFAULT_PATH

    async def receive_webhook(request: Request) -> Response:
        user_agent = request.headers.get("user-agent", "")
        if not user_agent.startswith(GITHUB_USER_AGENT_PREFIX):
            return PlainTextResponse("Forbidden", status_code=403)

        body = await request.body()
        result = await run_in_threadpool(handler.handle, request.headers, body)

        status_code = _STATUS_CODES[result.outcome]
        if result.outcome is Outcome.ACCEPTED:
            return Response(status_code=status_code)
        return PlainTextResponse(result.detail, status_code=status_code)

    app = Starlette(routes=[Route(path, receive_webhook, methods=["POST"])])
    app.state.handler = handler
    app.state.config = config
    return app
