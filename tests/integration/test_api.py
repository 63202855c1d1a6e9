"""
HTTP API 통합 테스트 (인메모리 DB + ASGITransport)
"""
from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from fixtures.users import GM_LOGIN, INVALID_LOGIN, OTHER_PLAYER_LOGIN, PLAYER_LOGIN
from server import create_app
from service.random_source import SeededRandomSource

pytestmark = pytest.mark.integration


@pytest.fixture
def app(test_db):
    return create_app(
        jwt_secret="test-secret",
        random_source=SeededRandomSource(7),
        init_db_on_startup=False,
    )


@asynccontextmanager
async def api_client(app, token: str | None = None):
    headers: dict[str, str] = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=headers) as client:
        yield client


async def login(app, payload: dict) -> dict:
    async with api_client(app) as client:
        resp = await client.post("/api/auth/login", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.mark.asyncio
async def test_health(app):
    async with api_client(app) as client:
        resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_login_and_roles(app):
    player = await login(app, PLAYER_LOGIN)
    gm = await login(app, GM_LOGIN)
    assert player["role"] == "player"
    assert gm["role"] == "gm"
    assert player["token"]

    async with api_client(app) as client:
        resp = await client.post("/api/auth/login", json=INVALID_LOGIN)
    assert resp.status_code == 401
    assert "error" in resp.json()


@pytest.mark.asyncio
async def test_gm_starts_with_more_gold(app):
    gm = await login(app, GM_LOGIN)
    async with api_client(app, gm["token"]) as client:
        resp = await client.get("/api/currency")
    assert resp.json() == {"gold": 1_000_000, "choco": 0, "money": 0}


@pytest.mark.asyncio
async def test_requires_token(app):
    async with api_client(app) as client:
        resp = await client.get("/api/weapons")
    assert resp.status_code == 401

    async with api_client(app, "not-a-token") as client:
        resp = await client.get("/api/weapons")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_weapon_lifecycle(app):
    player = await login(app, PLAYER_LOGIN)
    async with api_client(app, player["token"]) as client:
        resp = await client.post("/api/weapons", json={"name": "목검"})
        assert resp.status_code == 201
        weapon_id = resp.json()["id"]

        resp = await client.post("/api/weapons", json={"name": "목검"})
        assert resp.status_code == 409

        resp = await client.get(f"/api/weapons/{weapon_id}/enhance-info")
        assert resp.json()["cost"] == 1_000

        # +0 강화는 항상 성공
        resp = await client.post(f"/api/weapons/{weapon_id}/enhance")
        assert resp.status_code == 200
        body = resp.json()
        assert body["result"] == "success"
        assert body["new_level"] == 1
        assert body["gold_remaining"] == 9_000
        assert body["weapon"]["level"] == 1

        resp = await client.get(f"/api/weapons/{weapon_id}/history")
        assert len(resp.json()) == 1

        resp = await client.post(f"/api/weapons/{weapon_id}/sell", json={"confirm": False})
        assert resp.status_code == 400

        resp = await client.post(f"/api/weapons/{weapon_id}/sell", json={"confirm": True})
        assert resp.json() == {"gold_earned": 10, "gold_remaining": 9_010}

        resp = await client.post(f"/api/weapons/{weapon_id}/enhance")
        assert resp.status_code == 404


@pytest.mark.asyncio
async def test_convert_errors(app):
    player = await login(app, PLAYER_LOGIN)
    async with api_client(app, player["token"]) as client:
        resp = await client.post("/api/currency/convert", json={"from": "gold", "to": "choco", "amount": 5_000})
        assert resp.status_code == 400
        assert "최소 환전" in resp.json()["error"]

        resp = await client.post("/api/currency/convert", json={"from": "gold", "to": "choco", "amount": -1})
        assert resp.status_code == 400

        resp = await client.post("/api/currency/convert", json={"from": "gold", "to": "choco", "amount": 240_000})
        assert resp.status_code == 400

        resp = await client.get("/api/currency")
        assert resp.json()["gold"] == 10_000


@pytest.mark.asyncio
async def test_attendance(app):
    player = await login(app, PLAYER_LOGIN)
    async with api_client(app, player["token"]) as client:
        resp = await client.post("/api/attendance")
        assert resp.json()["reward"] == 60_000

        resp = await client.post("/api/attendance")
        assert resp.status_code == 409

        resp = await client.get("/api/attendance/status")
        assert resp.json()["checked_in_today"] is True

        resp = await client.post(
            "/api/currency/convert", json={"from": "gold", "to": "choco", "amount": 70_000}
        )
        assert resp.status_code == 400


@pytest.mark.asyncio
async def test_battle(app):
    player = await login(app, PLAYER_LOGIN)
    rival = await login(app, OTHER_PLAYER_LOGIN)

    async with api_client(app, rival["token"]) as client:
        rival_weapon = (await client.post("/api/weapons", json={"name": "단검"})).json()

    async with api_client(app, player["token"]) as client:
        my_weapon = (await client.post("/api/weapons", json={"name": "목검"})).json()

        resp = await client.post(
            "/api/battles",
            json={"attacker_weapon_id": my_weapon["id"], "defender_weapon_id": rival_weapon["id"]},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["gold_exchanged"] == 1_000
        assert {body["winner"]["username"], body["loser"]["username"]} == {"Newbie", "Rival"}

        resp = await client.post(
            "/api/battles",
            json={"attacker_weapon_id": my_weapon["id"], "defender_weapon_id": my_weapon["id"]},
        )
        assert resp.status_code == 400

        resp = await client.get("/api/battles/history")
        assert len(resp.json()) == 1

        resp = await client.get("/api/profiles/rankings")
        assert len(resp.json()["rankings"]) == 2


@pytest.mark.asyncio
async def test_admin(app):
    player = await login(app, PLAYER_LOGIN)
    gm = await login(app, GM_LOGIN)

    async with api_client(app, player["token"]) as client:
        resp = await client.get("/api/admin/users")
        assert resp.status_code == 403

    async with api_client(app, gm["token"]) as client:
        resp = await client.get("/api/admin/users")
        assert len(resp.json()) == 2

        resp = await client.patch(f"/api/admin/users/{player['id']}/currency", json={"gold": 5_000, "choco": 2})
        assert resp.json() == {"gold": 15_000, "choco": 2, "money": 0}

        resp = await client.patch(f"/api/admin/users/{player['id']}/currency", json={"gold": 100, "mode": "set"})
        assert resp.json()["gold"] == 100

        resp = await client.patch(f"/api/admin/users/{player['id']}/currency", json={"diamonds": 1})
        assert resp.status_code == 422

        resp = await client.post("/api/admin/users/give-currency", json={"denomination": "money", "amount": 1})
        assert resp.json() == {"recipients": 2}

        resp = await client.post(f"/api/admin/users/{player['id']}/hidden-weapons", json={"slug": "xmas_sword"})
        assert resp.status_code == 201
        assert resp.json()["is_hidden"] is True


@pytest.mark.asyncio
async def test_profiles_and_lookups(app):
    player = await login(app, PLAYER_LOGIN)
    rival = await login(app, OTHER_PLAYER_LOGIN)

    async with api_client(app, rival["token"]) as client:
        rival_weapon = (await client.post("/api/weapons", json={"name": "단검"})).json()

    async with api_client(app, player["token"]) as client:
        my_weapon = (await client.post("/api/weapons", json={"name": "목검"})).json()
        battle = (await client.post(
            "/api/battles",
            json={"attacker_weapon_id": my_weapon["id"], "defender_weapon_id": rival_weapon["id"]},
        )).json()

        resp = await client.get(f"/api/battles/{battle['battle_id']}")
        assert resp.status_code == 200
        assert resp.json()["gold_exchanged"] == 1_000

        resp = await client.get("/api/battles/999999")
        assert resp.status_code == 404

        resp = await client.get(f"/api/profiles/{rival['id']}")
        assert resp.status_code == 200
        assert resp.json()["username"] == "Rival"
        assert len(resp.json()["recent_battles"]) == 1

        resp = await client.get("/api/profiles/999999")
        assert resp.status_code == 404

        resp = await client.get("/api/profiles/me")
        assert resp.json()["username"] == "Newbie"

        resp = await client.get("/api/profiles/search", params={"query": "riv"})
        assert resp.status_code == 200
        assert [u["username"] for u in resp.json()["users"]] == ["Rival"]

        resp = await client.get("/api/profiles/search", params={"query": "r"})
        assert resp.status_code == 400

        resp = await client.get("/api/profiles/rankings", params={"limit": 1})
        body = resp.json()
        assert (body["total"], body["total_pages"]) == (2, 2)


@pytest.mark.asyncio
async def test_attendance_calendar(app):
    player = await login(app, PLAYER_LOGIN)

    async with api_client(app, player["token"]) as client:
        await client.post("/api/attendance")
        resp = await client.get("/api/attendance/calendar")
        assert resp.status_code == 200
        body = resp.json()
        assert sum(entry["checked"] for entry in body["calendar"]) == 1

        resp = await client.get("/api/attendance/calendar", params={"year": 2024, "month": 13})
        assert resp.status_code == 400
