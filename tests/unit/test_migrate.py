from pathlib import Path

import pytest

from authcenter.infrastructure.db import migrate

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_migrations_dir_follows_identity_type(monkeypatch):
    monkeypatch.delenv("MIGRATIONS_DIR", raising=False)
    assert migrate.migrations_dir("int") == Path("migrations") / "bigint"
    assert migrate.migrations_dir("str") == Path("migrations") / "text"

    monkeypatch.setenv("IDENTITY_TYPE", "str")
    assert migrate.migrations_dir() == Path("migrations") / "text"


def test_migrations_dir_override(monkeypatch):
    monkeypatch.setenv("MIGRATIONS_DIR", "/tmp/elsewhere")
    assert migrate.migrations_dir("int") == Path("/tmp/elsewhere")


@pytest.mark.parametrize("tree", ["bigint", "text"])
def test_both_trees_ship_the_same_versions(tree):
    versions = [p.stem for p in migrate.list_migrations(REPO_ROOT / "migrations" / tree)]
    other = "text" if tree == "bigint" else "bigint"
    assert versions
    assert versions == [
        p.stem for p in migrate.list_migrations(REPO_ROOT / "migrations" / other)
    ]


def test_new_creates_timestamped_file(tmp_path, capsys):
    assert migrate.cmd_new(tmp_path / "bigint", "add_index") == 0
    created = list((tmp_path / "bigint").glob("*_add_index.sql"))
    assert len(created) == 1
    assert str(created[0]) in capsys.readouterr().out


def test_usage_errors():
    assert migrate.main(["migrate"]) == 2
    assert migrate.main(["migrate", "nope"]) == 2
