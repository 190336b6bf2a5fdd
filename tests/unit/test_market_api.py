# tests/unit/test_market_api.py
"""HTTP surface of the market ledger, driven through the ASGI app."""
from httpx import AsyncClient

CREATE_BODY = {
    "applicantProfileId": "profile-1",
    "schoolName": "Stanford",
    "decisionType": "REA",
    "decisionDate": "2026-12-12",
}


async def _create(client: AsyncClient, **overrides) -> dict:
    resp = await client.post("/api/markets", json={**CREATE_BODY, **overrides})
    assert resp.status_code == 201
    return resp.json()


async def _bet(client: AsyncClient, market_id: str, user_id: str, prediction: str, amount):
    return await client.post(
        f"/api/markets/{market_id}/bet",
        json={"userId": user_id, "prediction": prediction, "amount": amount},
    )


class TestCreateAndGet:
    async def test_create_market(self, client: AsyncClient) -> None:
        body = await _create(client, initialOdds=30)
        assert body["id"].startswith("market-")
        assert body["currentOddsYes"] == 30
        assert body["currentOddsNo"] == 70
        assert body["status"] == "open"
        assert body["totalVolume"] == 0

    async def test_get_market(self, client: AsyncClient) -> None:
        market = await _create(client)
        resp = await client.get(f"/api/markets/{market['id']}")
        assert resp.status_code == 200
        assert resp.json()["schoolName"] == "Stanford"

    async def test_get_missing_market(self, client: AsyncClient) -> None:
        resp = await client.get("/api/markets/market-missing")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Market not found", "code": 3001}

    async def test_list_markets(self, client: AsyncClient) -> None:
        await _create(client)
        await _create(client, schoolName="Yale")
        resp = await client.get("/api/markets")
        assert [m["schoolName"] for m in resp.json()] == ["Stanford", "Yale"]

    async def test_missing_field_is_400(self, client: AsyncClient) -> None:
        resp = await client.post("/api/markets", json={"schoolName": "MIT", "decisionType": "EA"})
        assert resp.status_code == 400
        assert resp.json()["code"] == 4001


class TestBetting:
    async def test_place_bet(self, client: AsyncClient) -> None:
        market = await _create(client)
        resp = await _bet(client, market["id"], "alice", "yes", 100)

        assert resp.status_code == 201
        body = resp.json()
        assert body["bet"]["oddsAtBet"] == 50
        assert body["bet"]["payout"] == 0
        assert body["market"]["currentOddsYes"] == 60
        assert body["market"]["totalVolume"] == 100

    async def test_bet_on_missing_market(self, client: AsyncClient) -> None:
        resp = await _bet(client, "market-missing", "alice", "yes", 10)
        assert resp.status_code == 404
        assert resp.json()["error"] == "Market not found"

    async def test_invalid_amount(self, client: AsyncClient) -> None:
        market = await _create(client)
        resp = await _bet(client, market["id"], "alice", "yes", -5)
        assert resp.status_code == 400
        assert resp.json()["code"] == 4001

        resp = await _bet(client, market["id"], "alice", "yes", "10")
        assert resp.status_code == 400

    async def test_overlong_user_id_is_400(self, client: AsyncClient) -> None:
        market = await _create(client)
        resp = await _bet(client, market["id"], "u" * 65, "yes", 10)
        assert resp.status_code == 400
        assert resp.json()["code"] == 4001
        assert (await client.get(f"/api/markets/{market['id']}")).json()["totalVolume"] == 0

    async def test_bet_on_resolved_market(self, client: AsyncClient) -> None:
        market = await _create(client)
        await client.put(f"/api/markets/{market['id']}/resolve", json={"result": "accepted"})

        resp = await _bet(client, market["id"], "alice", "yes", 10)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Market is not open for betting", "code": 3002}


class TestLifecycle:
    async def test_full_round(self, client: AsyncClient) -> None:
        market = await _create(client, initialOdds=50)
        await _bet(client, market["id"], "alice", "yes", 100)
        await _bet(client, market["id"], "bob", "no", 100)

        resp = await client.put(
            f"/api/markets/{market['id']}/resolve", json={"result": "accepted"}
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["market"]["status"] == "resolved"
        assert body["market"]["actualResult"] == "accepted"
        assert body["market"]["currentOddsYes"] == 55
        assert [b["payout"] for b in body["bets"]] == [200, 0]

    async def test_resolve_twice_is_409(self, client: AsyncClient) -> None:
        market = await _create(client)
        url = f"/api/markets/{market['id']}/resolve"
        await client.put(url, json={"result": "accepted"})
        resp = await client.put(url, json={"result": "rejected"})
        assert resp.status_code == 409
        assert resp.json()["code"] == 3003

    async def test_resolve_bad_result(self, client: AsyncClient) -> None:
        market = await _create(client)
        resp = await client.put(
            f"/api/markets/{market['id']}/resolve", json={"result": "deferred"}
        )
        assert resp.status_code == 400

    async def test_close(self, client: AsyncClient) -> None:
        market = await _create(client)
        resp = await client.put(f"/api/markets/{market['id']}/close")
        assert resp.status_code == 200
        assert resp.json()["status"] == "closed"

        resp = await _bet(client, market["id"], "alice", "yes", 10)
        assert resp.status_code == 400

        resp = await client.put(f"/api/markets/{market['id']}/close")
        assert resp.status_code == 400
        assert resp.json()["code"] == 3004


class TestQueries:
    async def test_trending_is_not_captured_by_market_id(self, client: AsyncClient) -> None:
        small = await _create(client, schoolName="Small")
        big = await _create(client, schoolName="Big")
        await _bet(client, small["id"], "alice", "yes", 5)
        await _bet(client, big["id"], "alice", "yes", 50)

        resp = await client.get("/api/markets/trending")

        assert resp.status_code == 200
        assert [m["schoolName"] for m in resp.json()] == ["Big", "Small"]

    async def test_activity(self, client: AsyncClient) -> None:
        market = await _create(client)
        for i in range(3):
            await _bet(client, market["id"], f"user{i}", "yes", 1)

        resp = await client.get(f"/api/markets/{market['id']}/activity")

        assert [b["userId"] for b in resp.json()] == ["user2", "user1", "user0"]

    async def test_activity_of_unknown_market_is_empty(self, client: AsyncClient) -> None:
        resp = await client.get("/api/markets/market-missing/activity")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_user_bets(self, client: AsyncClient) -> None:
        market = await _create(client)
        await _bet(client, market["id"], "alice", "yes", 1)
        await _bet(client, market["id"], "bob", "no", 1)

        resp = await client.get("/api/markets/user/alice/bets")

        assert [b["userId"] for b in resp.json()] == ["alice"]

    async def test_leaderboard(self, client: AsyncClient) -> None:
        market = await _create(client)
        await _bet(client, market["id"], "alice", "yes", 100)
        await client.put(f"/api/markets/{market['id']}/resolve", json={"result": "accepted"})

        resp = await client.get("/api/markets/leaderboard")

        assert resp.status_code == 200
        top = resp.json()[0]
        assert top["userId"] == "alice"
        assert top["totalCreditsWon"] == 200
        assert top["rank"] == 1

    async def test_status_filter(self, client: AsyncClient) -> None:
        market = await _create(client)
        await _create(client, schoolName="Yale")
        await client.put(f"/api/markets/{market['id']}/close")

        resp = await client.get("/api/markets", params={"status": "closed"})

        assert [m["id"] for m in resp.json()] == [market["id"]]


async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert "X-Request-ID" in resp.headers
