from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict


class Pasta(BaseModel):
    """Metadata of a stored paste.

    A zero-valued instance (empty ``id``) is what the store hands back for a
    paste that does not exist.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = ""
    token: str = ""
    name: str = ""
    mime: str = ""
    # Unix timestamp, 0 means the paste never expires.
    expire_date: int = 0

    @property
    def found(self) -> bool:
        return self.id != ""

    def expired(self, now: float | None = None) -> bool:
        if self.expire_date == 0:
            return False
        current = time.time() if now is None else now
        return self.expire_date <= current
