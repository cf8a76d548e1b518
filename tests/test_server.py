"""
Replay server tests using FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from fate_echo.parity.seed_catalog import GOLDEN_SEED
from web.server import ServerSettings, app, load_settings


@pytest.fixture
def client():
    return TestClient(app)


class TestEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_cards(self, client):
        cards = client.get("/api/cards").json()["cards"]
        assert len(cards) == 78
        assert cards[77]["name"] == "King of Pentacles"

    def test_card_detail(self, client):
        response = client.get("/api/cards/0")
        assert response.status_code == 200
        assert response.json()["name"] == "The Fool"

    def test_card_not_found(self, client):
        assert client.get("/api/cards/78").status_code == 404

    def test_difficulties(self, client):
        data = client.get("/api/difficulties").json()["difficulties"]
        assert [d["id"] for d in data] == ["safe", "normal", "risky", "extreme", "abyss"]

    def test_battle(self, client):
        response = client.get("/api/battle", params={"seed": GOLDEN_SEED})
        assert response.status_code == 200
        data = response.json()
        assert data["player_won"] is True
        assert (data["player_final_hp"], data["enemy_final_hp"]) == (29, 26)
        assert data["seed"] == GOLDEN_SEED

    def test_battle_difficulty(self, client):
        data = client.get("/api/battle", params={"seed": "hello", "difficulty": "risky"}).json()
        assert data["difficulty"] == "risky"
        assert data["contract_exact"] is False

    def test_battle_bad_difficulty(self, client):
        response = client.get("/api/battle", params={"seed": "hello", "difficulty": "nightmare"})
        assert response.status_code == 400
        assert "unknown difficulty" in response.json()["detail"]

    def test_payout(self, client):
        data = client.get("/api/payout", params={"seed": GOLDEN_SEED, "bet": 10 ** 15}).json()
        assert data["outcome"] == "win"
        assert data["payout"] == str(19 * 10 ** 14)

    def test_payout_bet_out_of_range(self, client):
        response = client.get("/api/payout", params={"seed": GOLDEN_SEED, "bet": 1})
        assert response.status_code == 400

    def test_verify(self, client):
        data = client.get("/api/verify").json()
        assert data["match"] is True
        assert data["discrepancies"] == []


class TestSettings:

    def test_defaults(self):
        assert load_settings({}) == ServerSettings(host="127.0.0.1", port=8080, log_level="INFO")

    def test_from_env(self):
        settings = load_settings({
            "FATE_ECHO_HOST": "0.0.0.0",
            "FATE_ECHO_PORT": "9000",
            "FATE_ECHO_LOG_LEVEL": "debug",
        })
        assert settings == ServerSettings(host="0.0.0.0", port=9000, log_level="DEBUG")

    @pytest.mark.parametrize("env", [
        {"FATE_ECHO_PORT": "eighty"},
        {"FATE_ECHO_LOG_LEVEL": "chatty"},
    ])
    def test_invalid(self, env):
        with pytest.raises(ValueError):
            load_settings(env)
