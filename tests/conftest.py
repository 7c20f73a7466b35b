import asyncio
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Ensure project root is on sys.path so `tests.factories` resolves when
# pytest is invoked without an editable install.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from etf_matcher_vectors.config.config_loader import ConfigLoader
from etf_matcher_vectors.constants import CONFIG_PATH_ENV
from etf_matcher_vectors.services.catalog_service import (
    StaticCatalogSource,
    reset_catalog,
    set_catalog_source,
)
from tests.factories import make_manifest, make_scenario_records


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch):
    """Every test starts with no cached catalog and freshly loadable settings."""
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    ConfigLoader.reset()
    reset_catalog()
    yield
    reset_catalog()
    ConfigLoader.reset()


@pytest.fixture
def scenario_records():
    return make_scenario_records()


@pytest.fixture
def scenario_catalog(scenario_records):
    """Install the two-entry scenario catalog as the process catalog."""
    set_catalog_source(StaticCatalogSource(scenario_records))
    return scenario_records


async def _serve_data(request: web.Request) -> web.Response:
    name = request.match_info["name"]
    if name == "ticker_vector_configs.toml":
        return web.Response(text=make_manifest(), content_type="application/toml")
    if name == "missing.bin":
        return web.Response(status=404)
    if name == "broken.bin":
        return web.Response(status=503)
    if name == "forbidden.bin":
        return web.Response(status=403)
    if name == "slow.bin":
        await asyncio.sleep(2)
    if name.startswith("pause"):
        stats = request.app["stats"]
        stats["in_flight"] += 1
        stats["peak_in_flight"] = max(stats["peak_in_flight"], stats["in_flight"])
        try:
            await asyncio.sleep(0.2)
        finally:
            stats["in_flight"] -= 1
    if name == "empty.bin":
        return web.Response(body=b"", content_type="application/octet-stream")
    request.app["requests"].append(request)
    return web.Response(
        body=b"VEC\x00" + name.encode("utf-8"),
        content_type="application/octet-stream",
    )


@pytest_asyncio.fixture
async def data_server():
    """Local stand-in for the data host serving /data/<name>."""
    app = web.Application()
    app["requests"] = []
    app["stats"] = {"in_flight": 0, "peak_in_flight": 0}
    app.router.add_get("/data/{name}", _serve_data)
    server = TestServer(app)
    await server.start_server()
    yield server
    await server.close()
