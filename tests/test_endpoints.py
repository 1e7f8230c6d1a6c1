"""
Test HTTP endpoints against an isolated database.
"""

import pytest

from clipbin.core.setting import settings


async def new_api_key(client) -> str:
    response = await client.get("/api/key")
    assert response.status_code == 200
    return response.json()["api_key"]


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_create_and_view_clip(client):
    response = await client.post("/clip", json={"content": "hello world", "title": "hi"})

    assert response.status_code == 201
    body = response.json()
    assert body["hits"] == 0
    assert body["title"] == "hi"
    assert body["url"].endswith(f"/clip/{body['shortcode']}")
    assert "password" not in body

    response = await client.get(f"/clip/{body['shortcode']}")
    assert response.status_code == 200
    assert response.json()["content"] == "hello world"
    assert response.json()["hits"] == 1


@pytest.mark.asyncio
async def test_blank_content_is_bad_request(client):
    response = await client.post("/clip", json={"content": "   "})

    assert response.status_code == 400
    assert "content" in response.json()["detail"]


@pytest.mark.asyncio
async def test_bad_expiry_is_bad_request(client):
    response = await client.post("/clip", json={"content": "x", "expires": "soon"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_clip_is_not_found(client):
    response = await client.get("/clip/doesnotexist")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_password_protected_clip(client):
    created = await client.post("/clip", json={"content": "secret stuff", "password": "pw"})
    shortcode = created.json()["shortcode"]
    assert created.json()["password_protected"] is True

    response = await client.get(f"/clip/{shortcode}")
    assert response.status_code == 401
    assert "secret stuff" not in response.text

    response = await client.get(f"/clip/{shortcode}", headers={"X-Clip-Password": "nope"})
    assert response.status_code == 401

    response = await client.get(f"/clip/{shortcode}", headers={"X-Clip-Password": "pw"})
    assert response.status_code == 200
    assert response.json()["content"] == "secret stuff"

    response = await client.post(f"/clip/{shortcode}", json={"password": "pw"})
    assert response.status_code == 200
    assert response.json()["hits"] == 2


@pytest.mark.asyncio
async def test_api_writes_require_key(client):
    response = await client.post("/api/clip", json={"content": "hello"})
    assert response.status_code == 401

    response = await client.post(
        "/api/clip",
        json={"content": "hello"},
        headers={settings.API_KEY_HEADER: "bm90LWEta2V5"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_api_create_and_update(client):
    headers = {settings.API_KEY_HEADER: await new_api_key(client)}

    created = await client.post("/api/clip", json={"content": "v1"}, headers=headers)
    assert created.status_code == 201
    shortcode = created.json()["shortcode"]

    updated = await client.put(
        "/api/clip",
        json={"shortcode": shortcode, "content": "v2", "title": "second"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["content"] == "v2"
    assert updated.json()["title"] == "second"
    assert updated.json()["shortcode"] == shortcode

    viewed = await client.get(f"/api/clip/{shortcode}")
    assert viewed.json()["content"] == "v2"


@pytest.mark.asyncio
async def test_api_update_unknown_clip(client):
    headers = {settings.API_KEY_HEADER: await new_api_key(client)}

    response = await client.put(
        "/api/clip",
        json={"shortcode": "missing", "content": "v2"},
        headers=headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_revoke_api_key(client):
    api_key = await new_api_key(client)

    response = await client.delete(f"/api/key/{api_key}")
    assert response.status_code == 200
    assert response.json() == {"status": "revoked"}

    response = await client.post(
        "/api/clip",
        json={"content": "hello"},
        headers={settings.API_KEY_HEADER: api_key},
    )
    assert response.status_code == 401

    response = await client.delete(f"/api/key/{api_key}")
    assert response.status_code == 404
