"""Integration tests for account endpoints."""


class TestMe:
    async def test_requires_token(self, client):
        resp = await client.get("/me")
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "UNAUTHENTICATED"

    async def test_rejects_invalid_token(self, client):
        resp = await client.get("/me", headers={"Authorization": "Bearer forged"})
        assert resp.status_code == 401

    async def test_returns_profile(self, client, registered_user):
        user, headers = registered_user
        resp = await client.get("/me", headers=headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == user.id
        assert data["email"] == "member@example.com"
        assert data["subscription_tier"] == "free"


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["service"] == "viralgif-engine"
