from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import uvicorn

from userinfo_pages.app import create_app
from userinfo_pages.config import AppConfig, load_app_config


def _configure_logging(config: AppConfig) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if config.logging.file:
        log_file = Path(config.logging.file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def main() -> None:
    config = load_app_config()
    _configure_logging(config)

    host = os.environ.get("USERINFO_BIND") or config.network.bind_host

    env_port = os.environ.get("USERINFO_PORT")
    port = int(env_port) if env_port else config.network.port

    # Templates are loaded inside create_app(); failures abort before binding.
    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    main()
