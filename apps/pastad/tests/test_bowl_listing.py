import time

from pasta_core.models import Pasta

from pastad.adapters import DirectoryBowl


def test_list_returns_every_pasta(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    bowl.insert_pasta(Pasta(name="p1", mime="text/plain"))
    bowl.insert_pasta(Pasta(name="p2", mime="application/json", expire_date=int(time.time()) + 10000))

    pastas = sorted(bowl.list_pastas(), key=lambda p: p.name)

    assert [p.name for p in pastas] == ["p1", "p2"]


def test_list_skips_deleted_and_foreign_entries(tmp_path) -> None:
    bowl = DirectoryBowl(str(tmp_path))
    keep = bowl.insert_pasta(Pasta(name="keep"))
    gone = bowl.insert_pasta(Pasta(name="gone"))
    bowl.delete_pasta(gone.id)
    (tmp_path / "stray.txt").write_text("x", encoding="utf-8")
    (tmp_path / "nometa").mkdir()

    assert bowl.list_pastas() == [keep]


def test_separate_bowls_are_independent(tmp_path) -> None:
    first = DirectoryBowl(str(tmp_path / "one"))
    second = DirectoryBowl(str(tmp_path / "two"))
    first.insert_pasta(Pasta(name="only-in-first"))

    assert [p.name for p in first.list_pastas()] == ["only-in-first"]
    assert second.list_pastas() == []
