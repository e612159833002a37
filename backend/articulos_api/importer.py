"""
Load articles from a JSON export into the database.

The file may hold either a plain list of articles or an object with an
"articulos" list (the same body the upsert endpoints accept). Articles are
written with the bulk upsert unless --row-by-row is given, in which case
each article is committed on its own and failures are listed.

Usage:
    articulos-import export.json
    articulos-import export.json --row-by-row --database-url sqlite:///./dev.db
"""
import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from pydantic import TypeAdapter
from sqlalchemy.orm import sessionmaker

from articulos_api.config import settings
from articulos_api.db import build_engine, init_db
from articulos_api.log_config import configure_logging
from articulos_api.schemas.articulo_schema import ArticuloIn
from articulos_api.services.errors import StorageError
from articulos_api.services.upsert_service import UpsertService

log = logging.getLogger(__name__)

_articulos_adapter = TypeAdapter(List[ArticuloIn])


def load_articulos(path: str, validate: bool = True) -> List[Any]:
    """
    Read the export. With `validate` every record is checked up front and
    ArticuloIn instances are returned; otherwise the raw records are returned
    so the row-by-row upsert can reject bad ones individually.
    """
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("articulos")
    if not isinstance(data, list):
        raise ValueError("expected a list of articles or an object with an 'articulos' list")
    if not validate:
        return data
    return _articulos_adapter.validate_python(data)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Import articles from a JSON file")
    parser.add_argument("file", help="JSON file with the articles")
    parser.add_argument("--database-url", default=None, help="defaults to DATABASE_URL")
    parser.add_argument(
        "--row-by-row",
        action="store_true",
        help="commit each article on its own instead of one transaction",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    articulos = load_articulos(args.file, validate=not args.row_by_row)

    engine = build_engine(args.database_url)
    try:
        init_db(engine)
        s = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
        try:
            svc = UpsertService(s)
            if args.row_by_row:
                result = svc.upsert_rows(articulos)
                print(
                    f"inserted={result['inserted']} updated={result['updated']} "
                    f"errors={result['errors']} total={result['total']}"
                )
                for d in result["detalles"]:
                    if d["status"] == "ERROR":
                        print(f"  codart={d['codart']}: {d['error']}", file=sys.stderr)
                return 1 if result["errors"] else 0
            try:
                result = svc.upsert_bulk(articulos)
            except StorageError as e:
                print(f"import failed, nothing written: {e}", file=sys.stderr)
                return 1
            print(f"imported {result['total']} articles")
            return 0
        finally:
            s.close()
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
