import os

import pytest
from pasta_core.errors import PastaNotFoundError
from pasta_core.models import Pasta

from pastad.adapters import DirectoryBowl


def _write(bowl: DirectoryBowl, pasta_id: str, data: bytes) -> None:
    with bowl.get_pasta_writer(pasta_id) as writer:
        writer.write(data)


def _read(bowl: DirectoryBowl, pasta_id: str) -> bytes:
    with bowl.get_pasta_reader(pasta_id) as reader:
        return reader.read()


def test_new_pasta_has_empty_payload(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    pasta = bowl.insert_pasta(Pasta())

    assert _read(bowl, pasta.id) == b""


def test_payload_survives_unrelated_delete(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    data1 = os.urandom(4096 * 8)
    data2 = os.urandom(4096 * 8)
    p1 = bowl.insert_pasta(Pasta())
    _write(bowl, p1.id, data1)
    p2 = bowl.insert_pasta(Pasta())
    _write(bowl, p2.id, data2)

    assert _read(bowl, p1.id) == data1
    assert _read(bowl, p2.id) == data2

    bowl.delete_pasta(p1.id)

    assert _read(bowl, p2.id) == data2


def test_writer_replaces_whole_payload(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    pasta = bowl.insert_pasta(Pasta())
    _write(bowl, pasta.id, b"a much longer first payload")

    writer = bowl.get_pasta_writer(pasta.id)
    writer.write(b"short")
    writer.write(b"!")
    writer.close()

    assert _read(bowl, pasta.id) == b"short!"


def test_unclosed_writer_is_not_visible(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    pasta = bowl.insert_pasta(Pasta())
    _write(bowl, pasta.id, b"committed")

    writer = bowl.get_pasta_writer(pasta.id)
    writer.write(b"pending")

    assert _read(bowl, pasta.id) == b"committed"
    writer.close()
    assert _read(bowl, pasta.id) == b"pending"


def test_failed_write_keeps_previous_payload(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    pasta = bowl.insert_pasta(Pasta())
    _write(bowl, pasta.id, b"committed")

    with pytest.raises(RuntimeError):
        with bowl.get_pasta_writer(pasta.id) as writer:
            writer.write(b"torn")
            raise RuntimeError("boom")

    assert _read(bowl, pasta.id) == b"committed"
    assert sorted(p.name for p in (tmp_path / pasta.id).iterdir()) == ["blob", "metadata.json"]


def test_abort_discards_staged_bytes(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    pasta = bowl.insert_pasta(Pasta())

    writer = bowl.get_pasta_writer(pasta.id)
    writer.write(b"never")
    writer.abort()
    writer.close()

    assert writer.closed
    assert _read(bowl, pasta.id) == b""


def test_handles_for_missing_pasta(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))

    with pytest.raises(PastaNotFoundError):
        bowl.get_pasta_reader("missing")
    with pytest.raises(PastaNotFoundError):
        bowl.get_pasta_writer("missing")
