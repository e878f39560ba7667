import pytest

from conftest import make_movie
from main import app
from crud.history_crud import get_history_store
from utils.config import settings
from utils.errors import CatalogUnavailableError, CatalogUnauthorizedError
from utils.kinopoisk_client import SORT_RATING_DESC, SORT_VOTES_DESC, SORT_YEAR_ASC, SORT_YEAR_DESC

URL = "/api/recommendations/recommend"
SCENARIO = {"withWhom": "Один", "whenTime": "Пятничный вечер", "purpose": "Отдохнуть мозгом"}


def test_recommend_end_to_end(client, catalog, store):
    resp = client.post(URL, json=SCENARIO)
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["success"] is True
    assert body["scenario"] == {**SCENARIO, "showOnly": None}
    assert len(body["recommendations"]) == 10
    assert body["total"] == 15
    assert body["metadata"]["genres"] == ["драма", "биография"]
    assert body["metadata"]["catalogGenres"] == ["драма", "биография"]
    assert body["metadata"]["source"] == "kinopoisk_api"
    assert 1 <= body["metadata"]["page"] <= 5

    sort = body["metadata"]["sort"]
    allowed = [SORT_RATING_DESC, SORT_VOTES_DESC, SORT_YEAR_DESC, SORT_YEAR_ASC]
    assert (sort["field"], -1 if sort["direction"] == "desc" else 1) in allowed

    ids = {m["id"] for m in body["recommendations"]}
    assert ids <= {1000 + i for i in range(15)}
    assert set(body["recommendations"][0]) == {
        "id", "title", "originalTitle", "year", "rating", "genres", "poster", "description",
    }

    # one catalog call, no retries
    assert len(catalog.queries) == 1

    history = store.get_history("anonymous")
    assert len(history) == 1
    assert history[0].with_whom == "Один"
    assert history[0].movies_count == 10


def test_snake_case_keys_are_accepted(client):
    resp = client.post(URL, json={"with_whom": "С детьми", "when_time": "В отпуске", "purpose": "Вдохновиться"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["metadata"]["genres"] == ["мультфильм", "семейный"]


def test_missing_field_is_bad_request(client, store):
    resp = client.post(URL, json={"withWhom": "Один"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["kind"] == "missing_field"
    assert body["fields"] == ["whenTime", "purpose"]
    assert set(body["options"]) == {"withWhom", "whenTime", "purpose", "showOnly"}
    assert store.get_history("anonymous") == []


def test_invalid_enum_is_bad_request(client):
    resp = client.post(URL, json={**SCENARIO, "purpose": "invalid"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["kind"] == "invalid_enum_value"
    assert body["field"] == "purpose"
    assert body["accepted"] == ["Отдохнуть мозгом", "Вдохновиться", "Пощекотать нервы", "Порефлексировать"]


def test_empty_catalog_is_not_found_with_suggestions(client, catalog, store):
    catalog.docs = []
    resp = client.post(URL, json=SCENARIO)
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["kind"] == "no_results"
    assert body["suggestions"]
    assert store.get_history("anonymous") == []


def test_nothing_left_after_filter_is_not_found(client, catalog):
    catalog.docs = [make_movie(i, rating=7.0) for i in range(5)]
    resp = client.post(URL, json={**SCENARIO, "showOnly": "культовое"})
    assert resp.status_code == 404
    assert resp.json()["kind"] == "no_match_after_filter"


def test_show_only_filters_and_counts_post_filter_total(client, catalog):
    resp = client.post(URL, json={**SCENARIO, "showOnly": "культовое"})
    assert resp.status_code == 200
    body = resp.json()
    # ratings above 7.5 in the default fixture: 7.6 .. 9.0
    assert body["total"] == 8
    assert len(body["recommendations"]) == 8
    assert all(m["rating"] > 7.5 for m in body["recommendations"])
    assert catalog.queries[0].rating == (7.5, 10)


def test_catalog_outage_fails_fast(client, catalog, store, monkeypatch):
    monkeypatch.setattr(settings, "CATALOG_FALLBACK_ENABLED", False)
    catalog.error = CatalogUnavailableError("connection refused")
    resp = client.post(URL, json=SCENARIO)
    assert resp.status_code == 503
    body = resp.json()
    assert body["kind"] == "catalog_unavailable"
    assert body["detail"] == "connection refused"
    assert store.get_history("anonymous") == []


def test_catalog_misconfiguration_is_server_error(client, catalog):
    catalog.error = CatalogUnauthorizedError("KINOPOISK_API_KEY is not configured")
    resp = client.post(URL, json=SCENARIO)
    assert resp.status_code == 500
    assert resp.json()["kind"] == "catalog_unauthorized"


def test_internal_detail_hidden_in_production(client, catalog, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    catalog.error = CatalogUnavailableError("10.0.0.5:443 connection refused")
    body = client.post(URL, json=SCENARIO).json()
    assert body["kind"] == "catalog_unavailable"
    assert "detail" not in body


@pytest.mark.parametrize("failure", [CatalogUnavailableError("down"), None])
def test_fallback_data_when_enabled(client, catalog, monkeypatch, failure):
    monkeypatch.setattr(settings, "CATALOG_FALLBACK_ENABLED", True)
    catalog.error = failure
    catalog.docs = []  # with no error this is an empty catalog answer
    resp = client.post(URL, json=SCENARIO)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["metadata"]["source"] == "fallback_data"
    assert 0 < len(body["recommendations"]) <= 10


def test_history_failure_never_reaches_the_response(client):
    class BrokenStore:
        def save_entry(self, entry):
            raise RuntimeError("database is gone")

    app.dependency_overrides[get_history_store] = lambda: BrokenStore()
    resp = client.post(URL, json=SCENARIO)
    assert resp.status_code == 200
    assert resp.json()["success"] is True


def test_authenticated_request_is_recorded_for_the_user(client, store, auth_headers):
    resp = client.post(URL, json=SCENARIO, headers=auth_headers)
    assert resp.status_code == 200
    assert store.get_history("anonymous") == []
    assert len(store.get_history("1")) == 1


def test_invalid_token_is_treated_as_anonymous(client, store):
    resp = client.post(URL, json=SCENARIO, headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 200
    assert len(store.get_history("anonymous")) == 1


def test_options_and_index(client):
    options = client.get("/api/recommendations/options").json()
    assert options["success"] is True
    assert len(options["options"]["withWhom"]) == 6
    assert len(options["options"]["whenTime"]) == 4
    assert options["genreMap"]["Один"] == ["драма", "биография"]

    index = client.get("/api/recommendations/").json()
    paths = {e["path"] for e in index["endpoints"]}
    assert "/api/recommendations/recommend" in paths


def test_request_id_is_echoed_and_put_in_error_body(client):
    resp = client.post(URL, json={}, headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 400
    assert resp.headers["X-Request-ID"] == "req-123"
    assert resp.json()["request_id"] == "req-123"


@pytest.mark.parametrize("field, value", [
    ("withWhom", 5),
    ("whenTime", ["Пятничный вечер"]),
    ("purpose", {"text": "Вдохновиться"}),
    ("showOnly", True),
])
def test_non_string_values_get_the_invalid_enum_body(client, field, value):
    resp = client.post(URL, json={**SCENARIO, field: value})
    assert resp.status_code == 400, resp.text
    body = resp.json()
    assert body["success"] is False
    assert body["kind"] == "invalid_enum_value"
    assert body["field"] == field
    assert body["value"] == value
    assert body["accepted"] == body["options"][field]
