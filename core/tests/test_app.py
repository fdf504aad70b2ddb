from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from userinfo_pages import __version__
from userinfo_pages.app import create_app
from userinfo_pages.config import CONFIG_ENV, AppConfig, PagesConfig
from userinfo_pages.templates import TemplateLoadError


def test_healthz_ok() -> None:
    with TestClient(create_app(AppConfig())) as client:
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


def test_unknown_path_is_json_404() -> None:
    with TestClient(create_app(AppConfig())) as client:
        r = client.get("/nope")
        assert r.status_code == 404
        assert r.json() == {"error": "Not Found"}


def test_wrong_method_is_json_405() -> None:
    with TestClient(create_app(AppConfig())) as client:
        r = client.post("/logged-out")
        assert r.status_code == 405
        assert "error" in r.json()
        assert "GET" in r.headers["allow"]


def test_create_app_fails_fast_on_missing_template(tmp_path: Path) -> None:
    (tmp_path / "logged-out.html").write_text("{LOGIN_URL}", encoding="utf-8")
    cfg = AppConfig(pages=PagesConfig(templates_dir=str(tmp_path)))

    with pytest.raises(TemplateLoadError) as excinfo:
        create_app(cfg)
    assert str(tmp_path / "user-info.html") in str(excinfo.value)


def test_create_app_reads_config_from_env(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "userinfo.json"
    config_path.write_text(json.dumps({"pages": {"login_url": "/sign-in"}}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(config_path))

    with TestClient(create_app()) as client:
        r = client.get("/logged-out")
        assert r.status_code == 200
        assert 'href="/sign-in"' in r.text


def test_openapi_documents_user_header() -> None:
    with TestClient(create_app(AppConfig())) as client:
        spec = client.get("/openapi.json").json()
        assert "/user" in spec["paths"]
        assert "/logged-out" in spec["paths"]
        assert "security" in spec["paths"]["/user"]["get"]


def test_unhandled_error_is_json_500() -> None:
    app = create_app(AppConfig())

    @app.get("/boom")
    async def boom() -> None:
        raise ValueError("kaboom")

    with TestClient(app, raise_server_exceptions=False) as client:
        r = client.get("/boom")
        assert r.status_code == 500
        assert r.text == '{"error": "Internal server error"}'
        assert "kaboom" not in r.text


def test_requests_are_logged(caplog) -> None:
    with TestClient(create_app(AppConfig())) as client:
        with caplog.at_level(logging.INFO, logger="userinfo_pages.app"):
            client.get("/healthz")
            client.get("/user")

    messages = [r.getMessage() for r in caplog.records if r.name == "userinfo_pages.app"]
    assert "GET /healthz - 200" in messages
    assert "GET /user - 400" in messages


def test_app_reports_package_version() -> None:
    app = create_app(AppConfig())
    assert app.version == __version__
    assert app.state.page_templates.user_info
    assert app.state.config.pages.login_url == "/user"
