from typing import BinaryIO, Protocol

from pasta_core.models import Pasta


class PastaWriterHandle(Protocol):
    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...

    def abort(self) -> None: ...

    def __enter__(self) -> "PastaWriterHandle": ...

    def __exit__(self, exc_type, exc, tb) -> None: ...


class PastaBowl(Protocol):
    def insert_pasta(self, pasta: Pasta) -> Pasta: ...

    def get_pasta(self, pasta_id: str) -> Pasta: ...

    def find_pasta(self, pasta_id: str) -> Pasta | None: ...

    def delete_pasta(self, pasta_id: str) -> None: ...

    def list_pastas(self) -> list[Pasta]: ...

    def get_pasta_writer(self, pasta_id: str) -> PastaWriterHandle: ...

    def get_pasta_reader(self, pasta_id: str) -> BinaryIO: ...
