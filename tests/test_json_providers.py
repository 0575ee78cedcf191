"""Travclan and Tripjack forwarding handlers."""

import json

import httpx
import pytest

from conftest import unreachable

SEARCH = {
    "page": 2,
    "journeys": [{"origin": "DEL", "destination": "BOM", "date": "2026-11-02"}],
    "paxCount": {"adults": 1, "children": 0, "infants": 0},
}

PROVIDERS = [
    ("/api/travclan/flights", "aggregator-flights-v1.travclan.com", "Travclan"),
    ("/api/tripjack/flights", "tripjack.com", "Tripjack"),
]


@pytest.mark.parametrize("route,host,_name", PROVIDERS)
@pytest.mark.parametrize("status", [200, 201, 400, 403, 503])
def test_upstream_status_and_body_are_relayed(make_client, route, host, _name, status):
    upstream_body = {"status": {"success": status < 400}, "payload": {"results": [1, 2, 3]}}
    client = make_client(lambda request: httpx.Response(status, json=upstream_body))

    response = client.post(route, json=SEARCH, headers={"Authorization": "Bearer abc"})

    assert response.status_code == status
    assert response.json() == upstream_body


@pytest.mark.parametrize("route,host,_name", PROVIDERS)
def test_body_is_forwarded_unchanged(make_client, upstream_calls, route, host, _name):
    client = make_client(lambda request: httpx.Response(200, json={}))

    client.post(route, json=SEARCH, headers={"Authorization": "Bearer abc"})

    (sent,) = upstream_calls
    assert sent.method == "POST"
    assert sent.url.host == host
    assert json.loads(sent.content) == SEARCH


def test_travclan_headers(make_client, upstream_calls):
    client = make_client(lambda request: httpx.Response(200, json={}))

    client.post("/api/travclan/flights", json=SEARCH, headers={"Authorization": "Bearer tc-token"})

    sent = upstream_calls[0]
    assert str(sent.url) == "https://aggregator-flights-v1.travclan.com/api/v3/flights/search/"
    assert sent.headers["authorization"] == "Bearer tc-token"
    assert sent.headers["authorization-mode"] == "AWSCognito"
    assert sent.headers["source"] == "website"
    assert sent.headers["origin"] == "https://www.travclan.com"
    assert sent.headers["referer"] == "https://www.travclan.com/"
    assert "Chrome/137" in sent.headers["user-agent"]


def test_tripjack_headers(make_client, upstream_calls):
    client = make_client(lambda request: httpx.Response(200, json={}))

    client.post("/api/tripjack/flights", json=SEARCH, headers={"Authorization": "Bearer tj-token"})

    sent = upstream_calls[0]
    assert str(sent.url) == "https://tripjack.com/xms/v1/backend"
    assert sent.headers["authorization"] == "Bearer tj-token"
    assert sent.headers["browsername"] == "chrome"
    assert sent.headers["channeltype"] == "DESKTOP"
    assert sent.headers["currenv"] == "prod"
    assert sent.headers["whitelabel"] == ""
    assert sent.headers["origin"] == "https://tripjack.com"


def test_missing_authorization_is_not_invented(make_client, upstream_calls):
    client = make_client(lambda request: httpx.Response(401, json={"message": "Unauthorized"}))

    response = client.post("/api/travclan/flights", json=SEARCH)

    assert response.status_code == 401
    assert "authorization" not in upstream_calls[0].headers


@pytest.mark.parametrize("route,_host,name", PROVIDERS)
def test_network_failure_becomes_500(make_client, logger, route, _host, name):
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(fail)

    response = client.post(route, json=SEARCH, headers={"Authorization": "Bearer abc"})

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"] == f"{name} proxy error"
    assert payload["message"] == "connection refused"
    assert "ConnectError" in payload["details"]
    assert logger.errors[0][:2] == (name, 500)


@pytest.mark.parametrize("route,_host,name", PROVIDERS)
def test_non_json_upstream_becomes_500(make_client, route, _host, name):
    client = make_client(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))

    response = client.post(route, json=SEARCH)

    assert response.status_code == 500
    assert response.json()["error"] == f"{name} proxy error"


def test_invalid_json_body_is_rejected(make_client, upstream_calls):
    client = make_client(unreachable)

    response = client.post(
        "/api/travclan/flights",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert upstream_calls == []


def test_oversized_body_is_rejected(make_client, config, upstream_calls):
    client = make_client(unreachable)
    blob = "x" * (config.proxy.max_body_size + 1)

    response = client.post("/api/tripjack/flights", json={"blob": blob})

    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}
    assert upstream_calls == []


def test_incoming_request_is_logged(make_client, logger):
    client = make_client(lambda request: httpx.Response(200, json={"payload": {}}))

    client.post("/api/travclan/flights", json=SEARCH, headers={"Authorization": "Bearer abc"})

    provider, method, path, _headers, body = logger.incoming[0]
    assert (provider, method, path, body) == ("Travclan", "POST", "/api/travclan/flights", SEARCH)
    assert logger.requests == [("Travclan", "flight search request - Page 2")]
    assert logger.responses[0][:2] == ("Travclan", 200)


@pytest.mark.parametrize("route,_host,name", PROVIDERS)
@pytest.mark.parametrize("raw", [b'{"fare": NaN}', b'{"fare": Infinity}'])
def test_unrenderable_upstream_json_becomes_500(make_client, route, _host, name, raw):
    client = make_client(
        lambda request: httpx.Response(200, content=raw, headers={"Content-Type": "application/json"})
    )

    response = client.post(route, json=SEARCH, headers={"Origin": "http://localhost:5500"})

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "http://localhost:5500"
    payload = response.json()
    assert payload["error"] == f"{name} proxy error"
    assert payload["message"]
    assert "ValueError" in payload["details"]
