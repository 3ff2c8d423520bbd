"""Tests for the keyword cache routes."""
import pytest
from fastapi.testclient import TestClient

from seo_backend.cache import InMemoryStore
from seo_backend.main import app
from seo_backend.services.keyword_cache_service import (
    KeywordCacheService,
    get_keyword_cache_service,
)


@pytest.fixture
def service(clock):
    service = KeywordCacheService(InMemoryStore(), clock=clock)
    app.dependency_overrides[get_keyword_cache_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_keyword_cache_service, None)


@pytest.fixture
def client(service):
    return TestClient(app)


CLUSTERS = [{"parentId": 1, "childIds": [2, "kw-3"]}]


def test_clusters_round_trip(client):
    response = client.put(
        "/api/keyword-cache/example.com/clusters",
        json={"signature": "sig-a", "clusters": CLUSTERS},
    )
    assert response.status_code == 200
    assert response.json() == {"domain": "example.com", "saved": 1}

    response = client.get("/api/keyword-cache/example.com/clusters", params={"signature": "sig-a"})
    assert response.status_code == 200
    assert response.json() == {"domain": "example.com", "signature": "sig-a", "clusters": CLUSTERS}


def test_clusters_signature_mismatch_is_404(client):
    client.put("/api/keyword-cache/example.com/clusters", json={"signature": "sig-a", "clusters": CLUSTERS})

    response = client.get("/api/keyword-cache/example.com/clusters", params={"signature": "sig-b"})
    assert response.status_code == 404


def test_clusters_require_signature(client):
    response = client.get("/api/keyword-cache/example.com/clusters")
    assert response.status_code == 422


def test_domain_is_normalized(client, service):
    client.put("/api/keyword-cache/WWW.Example.com/clusters", json={"signature": "sig-a", "clusters": CLUSTERS})
    assert service.clusters.load("example.com", "sig-a") == CLUSTERS


def test_metrics_merge_and_read(client):
    client.post("/api/keyword-cache/example.com/metrics", json={"metrics": {"seo": {"volume": 10}}})
    response = client.post("/api/keyword-cache/example.com/metrics", json={"metrics": {"crm": {"volume": 3}}})
    assert response.json() == {"domain": "example.com", "terms": 2}

    response = client.get("/api/keyword-cache/example.com/metrics")
    assert response.json()["metrics"] == {"seo": {"volume": 10}, "crm": {"volume": 3}}


def test_purge_domain(client, service):
    client.put("/api/keyword-cache/example.com/clusters", json={"signature": "sig-a", "clusters": CLUSTERS})
    client.post("/api/keyword-cache/example.com/metrics", json={"metrics": {"seo": {"volume": 10}}})
    client.put("/api/keyword-cache/other.com/clusters", json={"signature": "sig-a", "clusters": CLUSTERS})

    response = client.delete("/api/keyword-cache/example.com")
    assert response.status_code == 200
    assert response.json() == {"domain": "example.com", "removed": {"clusters": True, "metrics": True}}

    assert service.load_clusters("example.com", "sig-a") is None
    assert service.load_metrics("example.com") == {}
    assert service.load_clusters("other.com", "sig-a") == CLUSTERS


def test_clusters_keep_extra_keys(client):
    clusters = [{"parentId": 1, "childIds": [2], "label": "seo tools"}]
    client.put("/api/keyword-cache/example.com/clusters", json={"signature": "sig-a", "clusters": clusters})

    response = client.get("/api/keyword-cache/example.com/clusters", params={"signature": "sig-a"})
    assert response.json()["clusters"] == clusters


def test_clusters_of_unexpected_shape_are_returned_as_stored(client, service):
    service.clusters.save("example.com", "sig-a", [{"parent": "x"}])

    response = client.get("/api/keyword-cache/example.com/clusters", params={"signature": "sig-a"})
    assert response.status_code == 200
    assert response.json()["clusters"] == [{"parent": "x"}]
