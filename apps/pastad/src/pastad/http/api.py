from __future__ import annotations

import logging
import time
from collections.abc import Iterator

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import StreamingResponse
from pasta_core.errors import DuplicateIdentifierError, PastaCoreError, PastaNotFoundError
from pasta_core.models import Pasta

from pastad.http.auth import require_owner
from pastad.http.schemas import CreatePastaResponse, PastaInfo

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _live_pasta(request: Request, pasta_id: str) -> Pasta:
    """Fetch a pasta, dropping it when it has expired."""
    bowl = request.app.state.ctx.bowl
    try:
        pasta = bowl.get_pasta(pasta_id)
    except PastaCoreError as exc:
        logger.error("Cannot load pasta %s: %s", pasta_id, exc)
        raise HTTPException(status_code=500, detail="Storage error") from exc
    if not pasta.found:
        raise HTTPException(status_code=404, detail="Pasta not found")
    if pasta.expired():
        logger.info("Pasta %s expired, deleting", pasta_id)
        bowl.delete_pasta(pasta_id)
        raise HTTPException(status_code=404, detail="Pasta not found")
    return pasta


def _pasta_url(request: Request, pasta_id: str) -> str:
    base = request.app.state.ctx.settings.public_url or str(request.base_url)
    return f"{base.rstrip('/')}/{pasta_id}"


def build_api_router() -> APIRouter:
    router = APIRouter(prefix="/api/v1")

    @router.post("/pastas", response_model=CreatePastaResponse)
    async def create_pasta(
        request: Request,
        file: UploadFile = File(...),
        name: str | None = Form(default=None),
        mime: str | None = Form(default=None),
        expire: int | None = Form(default=None),
    ) -> CreatePastaResponse:
        ctx = request.app.state.ctx
        settings = ctx.settings
        expire_seconds = settings.default_expire_seconds if expire is None else expire
        if expire_seconds < 0:
            raise HTTPException(status_code=400, detail="expire must not be negative")

        pasta = Pasta(
            name=name if name is not None else (file.filename or ""),
            mime=mime or file.content_type or "application/octet-stream",
            expire_date=int(time.time()) + expire_seconds if expire_seconds else 0,
        )
        try:
            ctx.bowl.insert_pasta(pasta)
        except DuplicateIdentifierError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except PastaCoreError as exc:
            logger.error("Cannot insert pasta: %s", exc)
            raise HTTPException(status_code=500, detail="Storage error") from exc

        written = 0
        with ctx.bowl.get_pasta_writer(pasta.id) as writer:
            while chunk := await file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > settings.max_upload_bytes:
                    writer.abort()
                    break
                writer.write(chunk)

        if written > settings.max_upload_bytes:
            ctx.bowl.delete_pasta(pasta.id)
            raise HTTPException(status_code=413, detail="Pasta too large")

        return CreatePastaResponse(
            id=pasta.id,
            token=pasta.token,
            name=pasta.name,
            mime=pasta.mime,
            expire_date=pasta.expire_date,
            url=_pasta_url(request, pasta.id),
        )

    @router.get("/pastas", response_model=list[PastaInfo])
    def list_pastas(request: Request) -> list[PastaInfo]:
        try:
            pastas = request.app.state.ctx.bowl.list_pastas()
        except PastaCoreError as exc:
            logger.error("Cannot list pastas: %s", exc)
            raise HTTPException(status_code=500, detail="Storage error") from exc
        return [PastaInfo.from_pasta(p) for p in pastas if not p.expired()]

    @router.get("/pastas/{pasta_id}", response_model=PastaInfo)
    def get_pasta(pasta_id: str, request: Request) -> PastaInfo:
        return PastaInfo.from_pasta(_live_pasta(request, pasta_id))

    @router.delete("/pastas/{pasta_id}")
    def delete_pasta(pasta_id: str, request: Request) -> dict[str, bool]:
        pasta = _live_pasta(request, pasta_id)
        require_owner(request, pasta)
        request.app.state.ctx.bowl.delete_pasta(pasta.id)
        return {"ok": True}

    return router


def build_raw_router() -> APIRouter:
    router = APIRouter()

    @router.get("/{pasta_id}", response_model=None)
    def raw_pasta(pasta_id: str, request: Request) -> StreamingResponse:
        pasta = _live_pasta(request, pasta_id)
        try:
            reader = request.app.state.ctx.bowl.get_pasta_reader(pasta.id)
        except PastaNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Pasta not found") from exc

        def _stream() -> Iterator[bytes]:
            with reader:
                while chunk := reader.read(CHUNK_SIZE):
                    yield chunk

        return StreamingResponse(_stream(), media_type=pasta.mime or "application/octet-stream")

    return router
