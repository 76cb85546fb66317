"""Minimal HTTP endpoint polled by external uptime monitors."""

import logging

from aiohttp import web

ALIVE_BODY = "Bot alive"


async def alive(_request: web.Request) -> web.Response:
    """Respond to the root path with a static body."""
    return web.Response(text=ALIVE_BODY)


def create_app() -> web.Application:
    """Build the liveness application. It only serves ``GET /``."""
    app = web.Application()
    app.router.add_get("/", alive)
    return app


async def start_liveness_server(host: str, port: int) -> web.AppRunner:
    """Start serving the liveness application in the running event loop.

    Returns:
        The runner; call ``await runner.cleanup()`` to stop the server.
    """
    runner = web.AppRunner(create_app())
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logging.getLogger(__name__).info("Liveness server ready on %s:%s", host, port)
    return runner
