import pytest
from aiohttp.test_utils import TestClient, TestServer

from ticket_panel.liveness import ALIVE_BODY, create_app, start_liveness_server


@pytest.mark.asyncio
async def test_root_path_reports_alive():
    async with TestClient(TestServer(create_app())) as client:
        resp = await client.get("/")

        assert resp.status == 200
        assert await resp.text() == ALIVE_BODY


@pytest.mark.asyncio
async def test_other_paths_not_served():
    async with TestClient(TestServer(create_app())) as client:
        resp = await client.get("/health")

        assert resp.status == 404


@pytest.mark.asyncio
async def test_start_liveness_server_binds_and_cleans_up():
    runner = await start_liveness_server("127.0.0.1", 0)
    try:
        assert runner.addresses
    finally:
        await runner.cleanup()
