from __future__ import annotations

from fastapi import FastAPI

from pastad.adapters import DirectoryBowl
from pastad.config import Settings
from pastad.http.api import build_api_router, build_raw_router
from pastad.http.context import AppContext


def create_app(settings: Settings | None = None) -> FastAPI:
    cfg = settings or Settings()
    cfg.ensure_dirs()

    ctx = AppContext(
        settings=cfg,
        bowl=DirectoryBowl(
            str(cfg.pasta_path),
            id_length=cfg.id_length,
            token_length=cfg.token_length,
        ),
    )

    app = FastAPI(title="pastad", version="0.1.0")
    app.state.ctx = ctx

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(build_api_router())
    # Catch-all "/{pasta_id}" goes last so it cannot shadow the routes above.
    app.include_router(build_raw_router())

    return app
