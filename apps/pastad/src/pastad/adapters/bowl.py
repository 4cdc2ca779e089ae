from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from pasta_core.errors import (
    CorruptRecordError,
    DuplicateIdentifierError,
    InvalidIdentifierError,
    PastaNotFoundError,
    StorageIOError,
)
from pasta_core.models import Pasta
from pasta_core.services import (
    DEFAULT_ID_LENGTH,
    DEFAULT_TOKEN_LENGTH,
    ID_ALPHABET,
    MAX_ID_LENGTH,
    generate_token,
    is_valid_id,
    random_string,
)
from pydantic import ValidationError

logger = logging.getLogger(__name__)

METADATA_FILE = "metadata.json"
BLOB_FILE = "blob"
_MAX_INSERT_ATTEMPTS = 16


class PastaWriter:
    """Write handle for a paste payload.

    Bytes are staged in a temporary file next to the payload and only
    replace it on ``close()``. Used as a context manager, an exception
    inside the block discards the staged bytes instead.
    """

    def __init__(self, target: Path) -> None:
        self._target = target
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        except OSError as exc:
            raise StorageIOError(f"Cannot open payload writer: {exc}") from exc
        self._tmp_path = Path(tmp_name)
        self._file = os.fdopen(fd, "wb")
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> int:
        if self._closed:
            raise ValueError("write to closed pasta writer")
        try:
            return self._file.write(data)
        except OSError as exc:
            raise StorageIOError(f"Cannot write payload: {exc}") from exc

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
            self._file.close()
            os.replace(self._tmp_path, self._target)
        except OSError as exc:
            self._discard()
            raise StorageIOError(f"Cannot commit payload: {exc}") from exc

    def abort(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._discard()

    def _discard(self) -> None:
        if not self._file.closed:
            self._file.close()
        self._tmp_path.unlink(missing_ok=True)

    def __enter__(self) -> PastaWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()


class DirectoryBowl:
    """Paste store rooted at a directory, one subdirectory per paste."""

    def __init__(
        self,
        directory: str,
        *,
        id_length: int = DEFAULT_ID_LENGTH,
        token_length: int = DEFAULT_TOKEN_LENGTH,
    ) -> None:
        self._root = Path(directory)
        self._root.mkdir(parents=True, exist_ok=True)
        self._id_length = id_length
        self._token_length = token_length

    @property
    def directory(self) -> Path:
        return self._root

    def _pasta_dir(self, pasta_id: str) -> Path | None:
        if not is_valid_id(pasta_id):
            return None
        return self._root / pasta_id

    @staticmethod
    def _encode(pasta: Pasta) -> str:
        return pasta.model_dump_json()

    @staticmethod
    def _decode(pasta_id: str, raw: bytes) -> Pasta:
        try:
            pasta = Pasta.model_validate_json(raw, strict=True)
        except ValidationError as exc:
            raise CorruptRecordError(f"Corrupt metadata for pasta {pasta_id!r}") from exc
        missing = set(Pasta.model_fields) - pasta.model_fields_set
        if missing:
            raise CorruptRecordError(f"Metadata for pasta {pasta_id!r} lacks {', '.join(sorted(missing))}")
        if pasta.id != pasta_id:
            raise CorruptRecordError(f"Metadata for pasta {pasta_id!r} names pasta {pasta.id!r}")
        return pasta

    def _write_metadata(self, pasta_dir: Path, pasta: Pasta) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{METADATA_FILE}.", suffix=".tmp", dir=pasta_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(self._encode(pasta))
            os.replace(tmp_name, pasta_dir / METADATA_FILE)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def generate_id(self, length: int | None = None) -> str:
        size = self._id_length if length is None else length
        if size > MAX_ID_LENGTH:
            raise ValueError(f"id length must not exceed {MAX_ID_LENGTH}")
        for _ in range(_MAX_INSERT_ATTEMPTS):
            candidate = random_string(size, ID_ALPHABET)
            if not (self._root / candidate).exists():
                return candidate
        raise StorageIOError("Could not allocate a unique pasta id")

    def _create_dir(self, pasta: Pasta) -> Path:
        if pasta.id:
            if not is_valid_id(pasta.id):
                raise InvalidIdentifierError(f"Invalid pasta id: {pasta.id!r}")
            pasta_dir = self._root / pasta.id
            try:
                pasta_dir.mkdir()
            except FileExistsError as exc:
                raise DuplicateIdentifierError(f"Pasta {pasta.id!r} already exists") from exc
            except OSError as exc:
                raise StorageIOError(f"Cannot create pasta directory: {exc}") from exc
            return pasta_dir

        # mkdir fails if another insert claimed the same id after generate_id checked it.
        for _ in range(_MAX_INSERT_ATTEMPTS):
            candidate = self.generate_id()
            pasta_dir = self._root / candidate
            try:
                pasta_dir.mkdir()
            except FileExistsError:
                logger.debug("Generated pasta id %s was taken, resampling", candidate)
                continue
            except OSError as exc:
                raise StorageIOError(f"Cannot create pasta directory: {exc}") from exc
            pasta.id = candidate
            return pasta_dir
        raise StorageIOError("Could not allocate a unique pasta id")

    def insert_pasta(self, pasta: Pasta) -> Pasta:
        pasta_dir = self._create_dir(pasta)
        if not pasta.token:
            pasta.token = generate_token(self._token_length)
        try:
            self._write_metadata(pasta_dir, pasta)
            (pasta_dir / BLOB_FILE).touch()
        except OSError as exc:
            raise StorageIOError(f"Cannot write pasta {pasta.id!r}: {exc}") from exc
        logger.info("Inserted pasta %s (mime=%s, expire_date=%s)", pasta.id, pasta.mime, pasta.expire_date)
        return pasta

    def find_pasta(self, pasta_id: str) -> Pasta | None:
        pasta_dir = self._pasta_dir(pasta_id)
        if pasta_dir is None:
            return None
        try:
            raw = (pasta_dir / METADATA_FILE).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageIOError(f"Cannot read pasta {pasta_id!r}: {exc}") from exc
        return self._decode(pasta_id, raw)

    def get_pasta(self, pasta_id: str) -> Pasta:
        return self.find_pasta(pasta_id) or Pasta()

    def delete_pasta(self, pasta_id: str) -> None:
        pasta_dir = self._pasta_dir(pasta_id)
        if pasta_dir is None:
            return
        try:
            shutil.rmtree(pasta_dir)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageIOError(f"Cannot delete pasta {pasta_id!r}: {exc}") from exc
        logger.info("Deleted pasta %s", pasta_id)

    def list_pastas(self) -> list[Pasta]:
        try:
            entries = list(os.scandir(self._root))
        except OSError as exc:
            raise StorageIOError(f"Cannot list pastas: {exc}") from exc

        pastas: list[Pasta] = []
        for entry in entries:
            if not entry.is_dir() or not is_valid_id(entry.name):
                continue
            pasta = self.find_pasta(entry.name)
            if pasta is None:
                logger.debug("Skipping %s: no metadata", entry.name)
                continue
            pastas.append(pasta)
        return pastas

    def get_pasta_writer(self, pasta_id: str) -> PastaWriter:
        pasta_dir = self._pasta_dir(pasta_id)
        if pasta_dir is None or not pasta_dir.is_dir():
            raise PastaNotFoundError(f"Pasta {pasta_id!r} not found")
        return PastaWriter(pasta_dir / BLOB_FILE)

    def get_pasta_reader(self, pasta_id: str) -> BinaryIO:
        pasta_dir = self._pasta_dir(pasta_id)
        if pasta_dir is None:
            raise PastaNotFoundError(f"Pasta {pasta_id!r} not found")
        try:
            return (pasta_dir / BLOB_FILE).open("rb")
        except FileNotFoundError as exc:
            raise PastaNotFoundError(f"Pasta {pasta_id!r} not found") from exc
        except OSError as exc:
            raise StorageIOError(f"Cannot open pasta {pasta_id!r}: {exc}") from exc
