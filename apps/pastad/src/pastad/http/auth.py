import secrets

from fastapi import HTTPException, Request, status
from pasta_core.models import Pasta

TOKEN_HEADER = "X-Pasta-Token"


def require_owner(request: Request, pasta: Pasta) -> None:
    supplied = request.headers.get(TOKEN_HEADER, "")
    if not supplied or not secrets.compare_digest(supplied.encode(), pasta.token.encode()):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        )
