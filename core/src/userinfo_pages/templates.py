from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "resources"

USER_INFO_TEMPLATE: Final[str] = "user-info.html"
LOGGED_OUT_TEMPLATE: Final[str] = "logged-out.html"

USER_ID_TOKEN: Final[str] = "{USER_ID}"
LOGOUT_URL_TOKEN: Final[str] = "{LOGOUT_URL}"
LOGIN_URL_TOKEN: Final[str] = "{LOGIN_URL}"

_EXPECTED_TOKENS: Final[dict[str, tuple[str, ...]]] = {
    USER_INFO_TEMPLATE: (USER_ID_TOKEN, LOGOUT_URL_TOKEN),
    LOGGED_OUT_TEMPLATE: (LOGIN_URL_TOKEN,),
}


class TemplateLoadError(RuntimeError):
    """Raised when a bundled HTML template cannot be loaded at startup."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class PageTemplates:
    user_info: str
    logged_out: str


def load_template(name: str, *, directory: Path = TEMPLATES_DIR) -> str:
    """Read a template resource as UTF-8 text.

    `name` may carry a leading slash (e.g. "/user-info.html"); it is always resolved
    under `directory`.
    """

    path = directory / name.lstrip("/")
    if not path.is_file():
        raise TemplateLoadError(f"Template file {path} not found", path)

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateLoadError(f"Failed to load HTML template: {path}", path) from exc


def load_page_templates(directory: Path | None = None) -> PageTemplates:
    directory = TEMPLATES_DIR if directory is None else directory

    loaded: dict[str, str] = {}
    for name, tokens in _EXPECTED_TOKENS.items():
        text = load_template(name, directory=directory)
        for token in tokens:
            if token not in text:
                logger.warning("Template %s has no %s placeholder", directory / name, token)
        loaded[name] = text

    logger.info("Loaded %d page templates from %s", len(loaded), directory)
    return PageTemplates(
        user_info=loaded[USER_INFO_TEMPLATE],
        logged_out=loaded[LOGGED_OUT_TEMPLATE],
    )


def render_template(template: str, replacements: Mapping[str, str]) -> str:
    # Literal substring replacement; tokens are not a template language.
    out = template
    for token, value in replacements.items():
        out = out.replace(token, value)
    return out
