import pytest
from httpx import AsyncClient

@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

@pytest.mark.asyncio
async def test_search_author_articles(client: AsyncClient):
    response = await client.get("/api/v1/search/", params={"q": "Smith", "publication": "australian_prescriber"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["page_total"] == 3
    assert data["from"] == 1
    assert data["to"] == 3
    assert data["results"] is True
    assert data["article_scope"] is True
    assert sorted(a["id"] for a in data["articles"]) == ["ap3", "ap4", "ap5"]

@pytest.mark.asyncio
async def test_search_without_query(client: AsyncClient):
    response = await client.get("/api/v1/search/", params={"scope": "radar"})
    assert response.status_code == 200
    data = response.json()
    assert data["terms"] == []
    assert data["total"] == 2

@pytest.mark.asyncio
async def test_malformed_numbers_are_coerced(client: AsyncClient):
    response = await client.get("/api/v1/search/", params={"q": "hypertension", "offset": "abc", "age": "-3"})
    assert response.status_code == 200
    data = response.json()
    assert data["from"] == 1
    assert data["total"] == 3

@pytest.mark.asyncio
async def test_out_of_range_offset(client: AsyncClient):
    response = await client.get("/api/v1/search/", params={"q": "hypertension", "offset": "20"})
    data = response.json()
    assert data["articles"] == []
    assert data["from"] == 21
    assert data["to"] == 3

@pytest.mark.asyncio
async def test_category_and_facets(client: AsyncClient):
    response = await client.get("/api/v1/search/", params={"q": "hypertension", "category": "News"})
    data = response.json()
    assert [a["id"] for a in data["articles"]] == ["nps2"]
    assert {f["value"] for f in data["facets"]} == {"Article", "Feedback", "News"}

@pytest.mark.asyncio
async def test_backend_unavailable(client: AsyncClient, content_index):
    content_index.unavailable = True
    response = await client.get("/api/v1/search/", params={"q": "gout"})
    assert response.status_code == 503
    assert response.json() == {"detail": "Search backend unavailable"}

@pytest.mark.asyncio
async def test_huge_numbers_are_clamped(client: AsyncClient):
    response = await client.get(
        "/api/v1/search/",
        params={"q": "hypertension", "scope": "australian_prescriber", "age": "99999", "offset": "99999999999999999999"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["articles"] == []
    assert data["total"] == 1
    assert data["to"] == 1
