from decimal import Decimal

import pytest

from articulos_api.models.articulo import Articulo
from articulos_api.schemas.articulo_schema import ArticuloOut
from articulos_api.services.articulo_service import ArticuloService
from articulos_api.services.errors import ValidationError


def _seed(db, n):
    for i in range(1, n + 1):
        db.add(Articulo(codart=i, npm=f"Article {i}", stock=i, pcosto=10.5, pordif=0))
    db.commit()


def test_create_then_get_returns_same_record(client):
    art = {"codart": 101, "npm": "LEVETIRACETAM 500 MG", "stock": 4, "pcosto": 1589.57, "pordif": 2.5}
    res = client.post("/api/articulos", json=art)
    assert res.status_code == 201
    assert res.json() == art

    res = client.get("/api/articulos/101")
    assert res.status_code == 200
    assert res.json() == art


def test_create_with_only_code_leaves_fields_null(client):
    res = client.post("/api/articulos", json={"codart": 7})
    assert res.status_code == 201
    assert res.json() == {"codart": 7, "npm": None, "stock": None, "pcosto": None, "pordif": None}


def test_create_requires_code(client):
    res = client.post("/api/articulos", json={"npm": "No code"})
    assert res.status_code == 400
    assert "codart" in res.json()["detail"]


def test_create_duplicate_code_is_rejected(client):
    assert client.post("/api/articulos", json={"codart": 5, "npm": "first"}).status_code == 201
    res = client.post("/api/articulos", json={"codart": 5, "npm": "second"})
    assert res.status_code == 400
    assert "exists" in res.json()["detail"]
    assert client.get("/api/articulos/5").json()["npm"] == "first"


def test_create_negative_stock_is_rejected(client):
    res = client.post("/api/articulos", json={"codart": 9, "stock": -1})
    assert res.status_code == 400
    assert client.get("/api/articulos/9").status_code == 404


def test_get_missing_article(client):
    res = client.get("/api/articulos/4242")
    assert res.status_code == 404
    assert res.json()["detail"] == "Article not found"


def test_get_non_numeric_code_is_bad_request(client):
    assert client.get("/api/articulos/abc").status_code == 400


def test_update_replaces_non_key_fields(client, db):
    _seed(db, 1)
    res = client.put("/api/articulos/1", json={"codart": 999, "npm": "Renamed", "stock": 3})
    assert res.status_code == 200
    body = res.json()
    # key is immutable, omitted fields are cleared
    assert body == {"codart": 1, "npm": "Renamed", "stock": 3, "pcosto": None, "pordif": None}
    assert client.get("/api/articulos/999").status_code == 404


def test_update_missing_article(client):
    res = client.put("/api/articulos/77", json={"npm": "ghost"})
    assert res.status_code == 404
    assert client.get("/api/articulos/77").status_code == 404


def test_delete_article(client, db):
    _seed(db, 2)
    res = client.delete("/api/articulos/1")
    assert res.status_code == 200
    assert "message" in res.json()
    assert client.get("/api/articulos/1").status_code == 404
    assert client.get("/api/articulos/2").status_code == 200


def test_delete_missing_article_leaves_table_unchanged(client, db):
    _seed(db, 3)
    res = client.delete("/api/articulos/50")
    assert res.status_code == 404
    assert client.get("/api/articulos").json()["total"] == 3


def test_pagination_second_page(client, db):
    _seed(db, 25)
    res = client.get("/api/articulos", params={"page": 2, "limit": 10})
    assert res.status_code == 200
    body = res.json()
    assert len(body["articulos"]) == 10
    assert body["total"] == 25
    assert body["pagina"] == 2
    assert body["totalPaginas"] == 3
    assert [a["codart"] for a in body["articulos"]] == list(range(11, 21))


def test_pagination_last_page_is_partial(client, db):
    _seed(db, 25)
    body = client.get("/api/articulos", params={"page": 3, "limit": 10}).json()
    assert [a["codart"] for a in body["articulos"]] == [21, 22, 23, 24, 25]


def test_default_page_size(client, db):
    _seed(db, 12)
    body = client.get("/api/articulos").json()
    assert len(body["articulos"]) == 10
    assert body["pagina"] == 1
    assert body["totalPaginas"] == 2


def test_empty_table_returns_404_with_empty_list(client):
    res = client.get("/api/articulos")
    assert res.status_code == 404
    body = res.json()
    assert body["articulos"] == []
    assert body["total"] == 0
    assert body["totalPaginas"] == 0


def test_invalid_pagination_params(client):
    assert client.get("/api/articulos", params={"page": 0}).status_code == 400
    assert client.get("/api/articulos", params={"limit": 0}).status_code == 400


def test_oversized_pagination_params_are_bad_request(client, db):
    _seed(db, 3)
    res = client.get("/api/articulos", params={"page": 10**19})
    assert res.status_code == 400
    assert isinstance(res.json()["detail"], list)
    assert client.get("/api/articulos", params={"limit": 10**6}).status_code == 400


def test_service_maps_unbindable_offset_to_validation_error(db):
    _seed(db, 1)
    with pytest.raises(ValidationError):
        ArticuloService(db).list_page(page=10**19, limit=10)


def test_cost_fields_stay_decimal(client, db):
    res = client.post("/api/articulos", json={"codart": 12, "pcosto": "1589.5701", "pordif": 2.25})
    assert res.status_code == 201
    assert res.json()["pcosto"] == 1589.5701
    assert db.get(Articulo, 12).pcosto == Decimal("1589.5701")

    out = ArticuloOut(codart=12, pcosto=Decimal("1589.5700"))
    assert out.model_dump()["pcosto"] == Decimal("1589.5700")
    assert out.model_dump(mode="json")["pcosto"] == 1589.57
