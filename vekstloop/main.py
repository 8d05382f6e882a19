"""FastAPI application entrypoint."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from vekstloop.api.v1._errors import action_error_handler
from vekstloop.api.v1.router import get_api_router
from vekstloop.core.config import get_config
from vekstloop.core.exceptions import ActionError
from vekstloop.core.startup import bootstrap


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.include_router(get_api_router())
    app.add_exception_handler(ActionError, action_error_handler)

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn vekstloop.main:app`.
app = create_app()


def run() -> None:
    bootstrap()
    cfg = get_config()
    uvicorn.run("vekstloop.main:app", host=cfg.API_HOST, port=cfg.API_PORT)


if __name__ == "__main__":
    run()
