"""Tests for the short drama proxy routes.

Upstream failures must be masked with a 200 fallback; missing parameters must
be reported as 400 without touching the upstream.
"""

import httpx


def test_categories_passes_upstream_payload_through(client, upstream):
    genuine = {"categories": [{"type_id": 11, "type_name": "穿越"}], "total": 1}
    upstream.handler = lambda request: httpx.Response(200, json=genuine)

    response = client.get("/api/shortdrama/categories")

    assert response.status_code == 200
    assert response.json() == genuine


def test_categories_falls_back_when_upstream_is_down(client, upstream):
    response = client.get("/api/shortdrama/categories")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 7
    assert [c["type_id"] for c in body["categories"]] == [1, 2, 3, 4, 5, 6, 7]
    assert len(upstream.requests) == 1


def test_categories_falls_back_on_timeout(client, upstream):
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.handler = slow

    response = client.get("/api/shortdrama/categories")

    assert response.status_code == 200
    assert response.json()["total"] == 7


def test_search_requires_name_and_skips_upstream(client, upstream):
    for params in ({}, {"name": ""}):
        response = client.get("/api/shortdrama/search", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": "name parameter is required"}

    assert upstream.requests == []


def test_search_masks_upstream_failure_with_query_seeded_results(client, upstream):
    response = client.get("/api/shortdrama/search", params={"name": "战神"})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 5
    assert len(body["list"]) == 5
    assert all("战神" in item["name"] for item in body["list"])
    assert all(item["score"] in {8, 9, 10} for item in body["list"])
    assert dict(upstream.requests[0].url.params) == {"name": "战神"}


def test_search_passes_upstream_payload_through(client, upstream):
    genuine = {"total": 1, "totalPages": 1, "currentPage": 1, "list": [{"id": 9, "name": "战神归来"}]}
    upstream.handler = lambda request: httpx.Response(200, json=genuine)

    response = client.get("/api/shortdrama/search", params={"name": "战神"})

    assert response.json() == genuine


def test_parse_single_requires_id_and_skips_upstream(client, upstream):
    response = client.get("/api/shortdrama/parse/single", params={"episode": "2"})

    assert response.status_code == 400
    assert response.json() == {"error": "id parameter is required"}
    assert upstream.requests == []


def test_parse_single_forces_proxy_and_falls_back(client, upstream):
    response = client.get("/api/shortdrama/parse/single", params={"id": "42", "episode": "2", "proxy": "false"})

    assert response.status_code == 200
    assert response.json() == {"code": 500, "message": "Failed to parse episode", "data": None}
    assert dict(upstream.requests[0].url.params) == {"id": "42", "episode": "2", "proxy": "true"}


def test_parse_single_passes_upstream_payload_through(client, upstream):
    genuine = {"code": 0, "message": "success", "data": {"url": "https://v/1.m3u8"}}
    upstream.handler = lambda request: httpx.Response(200, json=genuine)

    response = client.get("/api/shortdrama/parse/single", params={"id": "42"})

    assert response.json() == genuine


def test_list_requires_category(client, upstream):
    response = client.get("/api/shortdrama/list")

    assert response.status_code == 400
    assert response.json() == {"error": "categoryId is required"}
    assert upstream.requests == []


def test_list_normalizes_upstream_items(client, upstream):
    upstream.handler = lambda request: httpx.Response(
        200, json={"total": 1, "totalPages": 1, "currentPage": 1, "list": [{"id": 12, "name": "逆袭"}]}
    )

    response = client.get("/api/shortdrama/list", params={"categoryId": "3"})

    body = response.json()
    assert body["list"][0]["vod_id"] == 12
    assert body["list"][0]["id"] == "12"
    assert dict(upstream.requests[0].url.params) == {"categoryId": "3", "page": "1"}


def test_list_treats_malformed_payload_as_upstream_failure(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json={"unexpected": True})

    response = client.get("/api/shortdrama/list", params={"categoryId": "3", "page": "2"})

    assert response.status_code == 200
    body = response.json()
    assert body["currentPage"] == 2
    assert len(body["list"]) == 25


def test_latest_falls_back_to_array(client):
    response = client.get("/api/shortdrama/latest")

    assert response.status_code == 200
    assert isinstance(response.json(), list)
    assert len(response.json()) == 25


def test_recommend_falls_back_with_category(client):
    response = client.get("/api/shortdrama/recommend", params={"categoryId": "5"})

    assert response.status_code == 200
    assert response.json()["categoryId"] == 5
    assert response.json()["total"] == 5


def test_parse_batch_requires_id_and_falls_back(client, upstream):
    assert client.get("/api/shortdrama/parse/batch").status_code == 400
    assert upstream.requests == []

    response = client.get("/api/shortdrama/parse/batch", params={"id": "9", "episodes": "1,2"})
    assert response.json() == {"code": 500, "message": "Failed to parse episodes", "data": None}


def test_parse_all_marks_fallback_in_headers(client):
    response = client.get("/api/shortdrama/parse/all", params={"id": "8"})

    assert response.status_code == 200
    assert response.headers["X-Fallback-Data"] == "true"
    assert response.headers["X-Error-Category"] == "HTTP_ERROR"
    assert response.json()["videoId"] == 8


def test_parse_all_filters_unplayable_sources(client, upstream):
    upstream.handler = lambda request: httpx.Response(
        200,
        json={
            "videoId": 8,
            "results": [
                {"index": 0, "label": "第1集", "status": "success", "parsedUrl": "https://v/1.m3u8"},
                {"index": 1, "label": "第2集", "status": "failed"},
            ],
        },
    )

    response = client.get("/api/shortdrama/parse/all", params={"id": "8"})

    assert "X-Fallback-Data" not in response.headers
    assert response.json()["successfulCount"] == 1
    assert response.json()["filteredCount"] == 1
