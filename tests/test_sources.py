# File: tests/test_sources.py
"""Tests for the two identifier sources: content API resolver and bundled-file extractor."""
from __future__ import annotations

import asyncio
import json
import logging

import pytest
from aiohttp import web

from conftest import movies_app, serve_app
from site_manifest.sources.embedded import extract_embedded_ids, load_embedded_ids
from site_manifest.sources.remote import extract_identifier, fetch_content_ids


# --------------------------------------------------------------------------- #
#                             extract_identifier                               #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "item,expected",
    [
        ({"id": "a"}, "a"),
        ({"_id": "64f0c2"}, "64f0c2"),
        ({"id": "a", "_id": "b"}, "a"),
        ({"id": "", "_id": "b"}, "b"),
        ({"id": None, "_id": "b"}, "b"),
        ({"id": 42}, "42"),
        ({"id": 0}, "0"),
        ({"id": 1.5, "_id": "b"}, "b"),
        ({"id": 1.5}, None),
        ({"id": True}, None),
        ({"id": "bad\u0001id"}, None),
        ({"id": "two words"}, None),
        ({"_id": "line\nbreak"}, None),
        ({"title": "no id"}, None),
        ("a", None),
        (None, None),
    ],
)
def test_extract_identifier(item, expected):
    assert extract_identifier(item) == expected


# --------------------------------------------------------------------------- #
#                             fetch_content_ids                                #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_fetch_returns_ids_in_payload_order(unused_tcp_port: int):
    async def handler(_):
        return web.json_response([{"id": "a"}, {"id": "b"}])

    async for base in serve_app(movies_app(handler), unused_tcp_port):
        ids = await fetch_content_ids(base, timeout=2.0)

    assert ids == ["a", "b"]


@pytest.mark.asyncio()
async def test_fetch_skips_objects_without_identifier(unused_tcp_port: int):
    async def handler(_):
        return web.json_response(
            [{"id": "a"}, {"title": "orphan"}, {"_id": "mongo1"}, "junk", {"id": "c"}]
        )

    async for base in serve_app(movies_app(handler), unused_tcp_port):
        ids = await fetch_content_ids(base, timeout=2.0)

    assert ids == ["a", "mongo1", "c"]


@pytest.mark.asyncio()
async def test_fetch_server_error_degrades_to_empty(unused_tcp_port: int, caplog):
    async def handler(_):
        return web.Response(status=500)

    caplog.set_level(logging.WARNING)
    async for base in serve_app(movies_app(handler), unused_tcp_port):
        ids = await fetch_content_ids(base, timeout=2.0)

    assert ids == []
    assert "status: 500" in caplog.text


@pytest.mark.asyncio()
async def test_fetch_not_found_degrades_to_empty(unused_tcp_port: int):
    async def handler(_):
        return web.Response(status=404, text="nope")

    async for base in serve_app(movies_app(handler), unused_tcp_port):
        assert await fetch_content_ids(base, timeout=2.0) == []


@pytest.mark.asyncio()
async def test_fetch_malformed_json_degrades_to_empty(unused_tcp_port: int, caplog):
    async def handler(_):
        return web.Response(text="[{'id': broken", content_type="application/json")

    caplog.set_level(logging.WARNING)
    async for base in serve_app(movies_app(handler), unused_tcp_port):
        ids = await fetch_content_ids(base, timeout=2.0)

    assert ids == []
    assert "Could not fetch content IDs" in caplog.text


@pytest.mark.asyncio()
async def test_fetch_non_array_payload_degrades_to_empty(unused_tcp_port: int):
    async def handler(_):
        return web.json_response({"movies": [{"id": "a"}]})

    async for base in serve_app(movies_app(handler), unused_tcp_port):
        assert await fetch_content_ids(base, timeout=2.0) == []


@pytest.mark.asyncio()
async def test_fetch_timeout_degrades_to_empty(unused_tcp_port: int, caplog):
    async def handler(_):
        await asyncio.sleep(2)
        return web.json_response([{"id": "late"}])

    caplog.set_level(logging.WARNING)
    async for base in serve_app(movies_app(handler), unused_tcp_port):
        ids = await fetch_content_ids(base, timeout=0.3)

    assert ids == []
    assert "Could not fetch content IDs" in caplog.text


@pytest.mark.asyncio()
async def test_fetch_unreachable_host_degrades_to_empty(unused_tcp_port: int):
    # nothing listens on the port
    ids = await fetch_content_ids(f"http://localhost:{unused_tcp_port}/api", timeout=2.0)
    assert ids == []


@pytest.mark.asyncio()
async def test_fetch_uses_configured_collection(unused_tcp_port: int):
    app = web.Application()

    async def films(_):
        return web.json_response([{"id": "f1"}])

    app.router.add_get("/api/films", films)

    async for base in serve_app(app, unused_tcp_port):
        ids = await fetch_content_ids(base, collection="films", timeout=2.0)

    assert ids == ["f1"]


# --------------------------------------------------------------------------- #
#                             embedded extractor                               #
# --------------------------------------------------------------------------- #


def test_extract_all_quote_styles():
    blob = """
    export const staticMovies = [
      { id: 'single', title: 'A' },
      { id: "double", title: 'B' },
      { id:`tick`, title: 'C' },
    ];
    """
    assert extract_embedded_ids(blob) == ["single", "double", "tick"]


def test_extract_ignores_other_fields_ending_in_id():
    blob = "{ movie_id: 'm1', _id: 'm2', tmdbid: 'm3', id: 'real' }"
    assert extract_embedded_ids(blob) == ["real"]


def test_extract_quoted_keys():
    blob = '[{"id": "j1"}, {\'id\': \'j2\'}]'
    assert extract_embedded_ids(blob) == ["j1", "j2"]


def test_extract_captures_nested_fields_named_id():
    blob = "{ id: 'outer', director: { id: 'person-7' } }"
    assert extract_embedded_ids(blob) == ["outer", "person-7"]


def test_extract_skips_literals_unusable_in_urls(caplog):
    caplog.set_level(logging.WARNING)
    blob = "{ id: 'ok' }, { id: 'bad\x01id' }, { id: 'with space' }"
    assert extract_embedded_ids(blob) == ["ok"]
    assert "unusable id" in caplog.text


def test_extract_no_match_warns(caplog):
    caplog.set_level(logging.WARNING)
    assert extract_embedded_ids("export const staticMovies = [];") == []
    assert "No static movie IDs found" in caplog.text


def test_load_missing_file_degrades_to_empty(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    assert load_embedded_ids(tmp_path / "absent.js") == []
    assert "Could not read static movies" in caplog.text


def test_load_undecodable_file_degrades_to_empty(tmp_path):
    path = tmp_path / "binary.js"
    path.write_bytes(b"\xff\xfe\x00id: '\x80'")
    assert load_embedded_ids(path) == []


def test_load_directory_degrades_to_empty(tmp_path):
    assert load_embedded_ids(tmp_path) == []


def test_load_script_file(static_movies_file):
    assert load_embedded_ids(static_movies_file) == ["x"]


def test_load_json_file_is_parsed_structurally(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text(
        json.dumps([{"id": "j1", "cast": [{"id": "actor"}]}, {"id": 7}, {"title": "none"}]),
        encoding="utf-8",
    )
    assert load_embedded_ids(path) == ["j1", "7"]


def test_load_json_file_of_other_shape_is_scanned(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text(json.dumps({"items": [{"id": "k1"}]}), encoding="utf-8")
    assert load_embedded_ids(path) == ["k1"]


def test_load_json_file_skips_control_characters(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text(json.dumps([{"id": "j1"}, {"id": "nul\u0000id"}]), encoding="utf-8")
    assert load_embedded_ids(path) == ["j1"]


@pytest.mark.asyncio()
async def test_fetch_skips_identifiers_with_control_characters(unused_tcp_port: int, caplog):
    async def handler(_):
        return web.json_response([{"id": "a"}, {"id": "bad\u0001id"}, {"_id": "b"}])

    caplog.set_level(logging.WARNING)
    async for base in serve_app(movies_app(handler), unused_tcp_port):
        ids = await fetch_content_ids(base, timeout=2.0)

    assert ids == ["a", "b"]
    assert "unusable id" in caplog.text
