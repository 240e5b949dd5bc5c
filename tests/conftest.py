# File: tests/conftest.py
import asyncio
import logging
import threading
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path

import pytest
from aiohttp import web

from site_manifest.config import GeneratorConfig

FIXED_DATE = date(2024, 5, 17)

STATIC_MOVIES_JS = """\
export const staticMovies = [
  { id: 'x', title: 'X', year: 2020 },
];
"""


@pytest.fixture(autouse=True)
def _restore_project_logger() -> Iterator[None]:
    """Undo logger reconfiguration (e.g. CLI ``--log-level``) so it does not leak between tests."""
    lg = logging.getLogger("SiteManifest")
    level, handlers, propagate = lg.level, list(lg.handlers), lg.propagate
    yield
    lg.setLevel(level)
    lg.handlers[:] = handlers
    lg.propagate = propagate


@pytest.fixture()
def fixed_date() -> date:
    return FIXED_DATE


@pytest.fixture()
def static_movies_file(tmp_path) -> Path:
    """A bundled fallback definition yielding exactly one identifier: ``x``."""
    path = tmp_path / "staticMovies.js"
    path.write_text(STATIC_MOVIES_JS, encoding="utf-8")
    return path


@pytest.fixture()
def make_config(tmp_path, static_movies_file):
    """
    Factory for GeneratorConfig pointing at tmp paths; keyword arguments override fields.
    """

    def _make(**overrides) -> GeneratorConfig:
        data = {
            "base_url": "https://example.com",
            "api_base": "http://127.0.0.1:9/api",
            "output_dir": tmp_path / "out",
            "embedded_source": static_movies_file,
            "timeout": 2.0,
        }
        data.update(overrides)
        return GeneratorConfig(**data)

    return _make


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield the API base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}/api"
    finally:
        await runner.cleanup()


def movies_app(handler) -> web.Application:
    """Application exposing *handler* at ``/api/movies``."""
    app = web.Application()
    app.router.add_get("/api/movies", handler)
    return app


@contextmanager
def serve_app_in_thread(app: web.Application, port: int) -> Iterator[str]:
    """Run *app* on its own loop in a background thread, for synchronous callers such as CliRunner."""
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    runner = web.AppRunner(app)

    async def _start():
        await runner.setup()
        await web.TCPSite(runner, "localhost", port).start()

    asyncio.run_coroutine_threadsafe(_start(), loop).result(timeout=5)
    try:
        yield f"http://localhost:{port}/api"
    finally:
        asyncio.run_coroutine_threadsafe(runner.cleanup(), loop).result(timeout=5)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=5)
        loop.close()
