from __future__ import annotations

from pasta_core.models import Pasta
from pydantic import BaseModel


class PastaInfo(BaseModel):
    id: str
    name: str
    mime: str
    expire_date: int

    @classmethod
    def from_pasta(cls, pasta: Pasta) -> PastaInfo:
        return cls(id=pasta.id, name=pasta.name, mime=pasta.mime, expire_date=pasta.expire_date)


class CreatePastaResponse(PastaInfo):
    token: str
    url: str
