import json

import pytest
import requests

from movie_recommender.query import build_catalog_query
from utils import kinopoisk_client
from utils.errors import (
    CatalogRateLimitedError,
    CatalogUnauthorizedError,
    CatalogUnavailableError,
    CatalogUpstreamError,
    ErrorKind,
    NoResultsError,
)
from utils.kinopoisk_client import CatalogQuery, KinopoiskClient, SORT_YEAR_ASC


def make_response(status_code, body=None, raw=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = "https://catalog.test/v1.4/movie"
    resp._content = raw if raw is not None else json.dumps(body or {}).encode("utf-8")
    return resp


@pytest.fixture()
def query():
    return CatalogQuery(genres=["драма"], rating=(6.5, 10), page=2, sort=SORT_YEAR_ASC)


@pytest.fixture()
def calls(monkeypatch):
    recorded = []

    def install(result):
        def fake_request(method, url, params=None, headers=None, timeout=None):
            recorded.append({"method": method, "url": url, "params": params, "headers": headers, "timeout": timeout})
            if isinstance(result, Exception):
                raise result
            return result

        monkeypatch.setattr(kinopoisk_client.requests, "request", fake_request)
        return recorded

    return install


def make_client():
    return KinopoiskClient(api_key="secret", base_url="https://catalog.test/v1.4/", timeout=10)


def test_successful_query_returns_docs(calls, query):
    recorded = calls(make_response(200, {"docs": [{"id": 1}, {"id": 2}], "total": 2}))
    docs = make_client().find_movies(query)

    assert docs == [{"id": 1}, {"id": 2}]
    call = recorded[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://catalog.test/v1.4/movie"
    assert call["headers"]["X-API-KEY"] == "secret"
    assert call["timeout"] == 10
    assert call["params"]["sortField"] == "year"
    assert call["params"]["sortType"] == "1"
    assert call["params"]["page"] == 2


def test_empty_docs_is_no_results(calls, query):
    calls(make_response(200, {"docs": []}))
    with pytest.raises(NoResultsError) as exc:
        make_client().find_movies(query)
    assert exc.value.kind is ErrorKind.NO_RESULTS


@pytest.mark.parametrize(
    "status, error",
    [
        (401, CatalogUnauthorizedError),
        (403, CatalogUnauthorizedError),
        (429, CatalogRateLimitedError),
        (500, CatalogUpstreamError),
        (502, CatalogUpstreamError),
        (404, CatalogUpstreamError),
    ],
)
def test_http_errors_are_classified(calls, query, status, error):
    calls(make_response(status, {"message": "nope"}))
    with pytest.raises(error) as exc:
        make_client().find_movies(query)
    assert exc.value.upstream_status == status


@pytest.mark.parametrize("failure", [requests.Timeout("slow"), requests.ConnectionError("down")])
def test_transport_errors_are_unavailable(calls, query, failure):
    calls(failure)
    with pytest.raises(CatalogUnavailableError) as exc:
        make_client().find_movies(query)
    assert exc.value.status_code == 503


def test_non_json_body_is_upstream_error(calls, query):
    calls(make_response(200, raw=b"<html>maintenance</html>"))
    with pytest.raises(CatalogUpstreamError):
        make_client().find_movies(query)


@pytest.mark.parametrize("raw", [b"[]", b"null", b"\"maintenance\"", b"{\"docs\": {\"id\": 1}}"])
def test_unexpected_body_shape_is_upstream_error(calls, query, raw):
    calls(make_response(200, raw=raw))
    with pytest.raises(CatalogUpstreamError) as exc:
        make_client().find_movies(query)
    assert exc.value.kind is ErrorKind.CATALOG_UPSTREAM_ERROR


def test_non_object_docs_are_skipped(calls, query):
    calls(make_response(200, {"docs": ["broken", {"id": 7}]}))
    assert make_client().find_movies(query) == [{"id": 7}]


def test_missing_credential_fails_without_calling(calls, query):
    recorded = calls(make_response(200, {"docs": [{"id": 1}]}))
    with pytest.raises(CatalogUnauthorizedError) as exc:
        KinopoiskClient(api_key="").find_movies(query)
    assert recorded == []
    assert exc.value.status_code == 500


def test_error_detail_can_be_hidden(calls, query):
    calls(make_response(429))
    with pytest.raises(CatalogRateLimitedError) as exc:
        make_client().find_movies(query)
    assert "detail" in exc.value.to_dict(include_detail=True)
    assert "detail" not in exc.value.to_dict(include_detail=False)


def test_poster_url():
    assert KinopoiskClient.poster_url({"url": "https://x/1.jpg", "previewUrl": "https://x/p.jpg"}) == "https://x/1.jpg"
    assert KinopoiskClient.poster_url({"previewUrl": "https://x/p.jpg"}) == "https://x/p.jpg"
    assert KinopoiskClient.poster_url(None) is None
    assert KinopoiskClient.poster_url("https://x/1.jpg") is None


def test_built_query_goes_out_as_params(calls):
    import random

    recorded = calls(make_response(200, {"docs": [{"id": 7}]}))
    q = build_catalog_query(["драма"], "малоизвестное", random.Random(3))
    make_client().find_movies(q)
    assert recorded[0]["params"]["votes.kp"] == "100-10000"
