"""HTML pages for the logged-in user and the post-logout landing page.

Both pages are static templates with literal placeholder tokens; nothing here is
rendered by a template engine.
"""

from __future__ import annotations

import html
from urllib.parse import quote_plus

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from userinfo_pages.config import AppConfig, PagesConfig
from userinfo_pages.identity import require_user_id
from userinfo_pages.templates import (
    LOGIN_URL_TOKEN,
    LOGOUT_URL_TOKEN,
    USER_ID_TOKEN,
    PageTemplates,
    render_template,
)

router = APIRouter(tags=["pages"])


def build_logout_url(pages: PagesConfig) -> str:
    return f"{pages.logout_endpoint}?logout={quote_plus(pages.logged_out_redirect)}"


def _get_templates(request: Request) -> PageTemplates:
    templates: PageTemplates = request.app.state.page_templates
    return templates


def _get_pages_config(request: Request) -> PagesConfig:
    config: AppConfig = request.app.state.config
    return config.pages


@router.get("/user", response_class=HTMLResponse)
async def user_info(request: Request, user_id: str = Depends(require_user_id)) -> HTMLResponse:
    templates = _get_templates(request)
    pages = _get_pages_config(request)

    shown = html.escape(user_id) if pages.escape_user_id else user_id
    body = render_template(
        templates.user_info,
        {
            USER_ID_TOKEN: shown,
            LOGOUT_URL_TOKEN: build_logout_url(pages),
        },
    )
    return HTMLResponse(body)


@router.get("/logged-out", response_class=HTMLResponse)
async def logged_out(request: Request) -> HTMLResponse:
    templates = _get_templates(request)
    pages = _get_pages_config(request)

    body = render_template(templates.logged_out, {LOGIN_URL_TOKEN: pages.login_url})
    return HTMLResponse(body)
