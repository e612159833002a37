import json

import pytest
from sqlalchemy import create_engine, text

from articulos_api.importer import load_articulos, main


def _write(tmp_path, data):
    path = tmp_path / "export.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _count(db_url):
    eng = create_engine(db_url)
    try:
        with eng.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM _articulos")).scalar()
    finally:
        eng.dispose()


def test_load_accepts_list_or_wrapped_object(tmp_path):
    arts = [{"codart": 1, "npm": "A"}, {"codart": 2}]
    assert [a.codart for a in load_articulos(_write(tmp_path, arts))] == [1, 2]
    assert len(load_articulos(_write(tmp_path, {"articulos": arts}))) == 2


def test_load_rejects_other_shapes(tmp_path):
    with pytest.raises(ValueError):
        load_articulos(_write(tmp_path, {"items": []}))


def test_bulk_import(tmp_path, capsys):
    db_url = f"sqlite:///{tmp_path / 'import.db'}"
    path = _write(tmp_path, {"articulos": [{"codart": 1, "npm": "A"}, {"codart": 2, "stock": 3}]})
    assert main([path, "--database-url", db_url]) == 0
    assert "imported 2 articles" in capsys.readouterr().out
    assert _count(db_url) == 2


def test_bulk_import_failure_writes_nothing(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'import.db'}"
    path = _write(tmp_path, [{"codart": 1}, {"codart": 2, "stock": -1}])
    assert main([path, "--database-url", db_url]) == 1
    assert _count(db_url) == 0


def test_row_by_row_import_reports_errors(tmp_path, capsys):
    db_url = f"sqlite:///{tmp_path / 'import.db'}"
    path = _write(tmp_path, [{"codart": 1}, {"npm": "no code"}, {"codart": 3}])
    assert main([path, "--database-url", db_url, "--row-by-row"]) == 1
    out = capsys.readouterr()
    assert "inserted=2 updated=0 errors=1 total=3" in out.out
    assert "codart is required" in out.err
    assert _count(db_url) == 2


def test_row_by_row_import_skips_invalid_records(tmp_path, capsys):
    db_url = f"sqlite:///{tmp_path / 'import.db'}"
    path = _write(tmp_path, [{"codart": 1}, {"codart": 2, "stock": "lots"}, {"codart": 3}])
    assert main([path, "--database-url", db_url, "--row-by-row"]) == 1
    out = capsys.readouterr()
    assert "inserted=2 updated=0 errors=1 total=3" in out.out
    assert "codart=2: stock" in out.err
    assert _count(db_url) == 2


def test_load_without_validation_returns_raw_records(tmp_path):
    raw = load_articulos(_write(tmp_path, [{"codart": "x"}]), validate=False)
    assert raw == [{"codart": "x"}]
