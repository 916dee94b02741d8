"""Shared fixtures: a throwaway asset directory and a Flask test client over it."""
from __future__ import annotations

import copy

import pytest

import static_server
from schemas import DEFAULTS

INDEX_HTML = b"<!doctype html><html><body><h1>entry</h1></body></html>\n"
APP_CSS = b"body { color: #e5e7eb; }\n"
LOGO_PNG = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01"
DOCS_INDEX = b"<!doctype html><title>docs</title>\n"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in ("PORT", "HOST", "STATIC_DIR", "SERVER_CONFIG", "HEALTH_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def asset_dir(tmp_path):
    root = tmp_path / "public"
    (root / "css").mkdir(parents=True)
    (root / "img").mkdir()
    (root / "docs").mkdir()
    (root / "empty").mkdir()
    (root / "index.html").write_bytes(INDEX_HTML)
    (root / "css" / "app.css").write_bytes(APP_CSS)
    (root / "img" / "logo.png").write_bytes(LOGO_PNG)
    (root / "docs" / "index.html").write_bytes(DOCS_INDEX)
    (root / ".env").write_text("SECRET=1\n")
    (tmp_path / "secret.txt").write_text("outside the asset directory\n")
    return root


@pytest.fixture
def cfg(asset_dir):
    config = copy.deepcopy(DEFAULTS)
    config["server"]["host"] = "127.0.0.1"
    config["static"]["directory"] = str(asset_dir)
    return config


@pytest.fixture
def client(cfg):
    return static_server.create_app(cfg).test_client()
