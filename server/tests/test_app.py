# server/tests/test_app.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.middleware.rate_limit import FixedWindowLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestAppWiring:

    def test_health(self):
        client = TestClient(create_app(Settings()))
        assert client.get("/health").json() == {"status": "ok"}

    def test_unknown_route_uses_error_body(self):
        client = TestClient(create_app(Settings()))
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_non_json_body_is_client_error(self):
        client = TestClient(create_app(Settings()))
        response = client.post(
            "/api/calculate-nutrition", content="not json", headers={"content-type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request payload"}


class TestRateLimiting:

    def test_chat_limit(self):
        client = TestClient(create_app(Settings(openai_api_key=None, chat_rate_limit=2)))

        statuses = [client.post("/api/chat", json={"messages": []}).status_code for _ in range(3)]

        # missing key answers 500; the third call never reaches the relay
        assert statuses == [500, 500, 429]
        response = client.post("/api/chat", json={"messages": []})
        assert response.json() == {"error": "Too many chat requests. Limit: 2 per hour."}

    def test_api_limit_is_separate_from_chat(self):
        client = TestClient(create_app(Settings(openai_api_key=None, chat_rate_limit=1, api_rate_limit=2)))

        assert client.post("/api/chat", json={"messages": []}).status_code == 500
        assert client.post("/api/chat", json={"messages": []}).status_code == 429
        assert client.get("/api/daily-prompt/1").status_code == 200
        assert client.get("/api/milestone/5").status_code == 200
        response = client.get("/api/daily-prompt/2")
        assert response.status_code == 429
        assert response.json() == {"error": "Too many requests. Please try again later."}

    def test_clients_keyed_on_proxy_appended_address(self):
        client = TestClient(create_app(Settings(api_rate_limit=1)))

        assert client.get("/api/daily-prompt/1", headers={"x-forwarded-for": "10.0.0.1"}).status_code == 200
        assert client.get("/api/daily-prompt/1", headers={"x-forwarded-for": "10.0.0.1, 10.0.0.2"}).status_code == 200
        assert client.get("/api/daily-prompt/1", headers={"x-forwarded-for": "10.0.0.9, 10.0.0.1"}).status_code == 429

    def test_rotating_forged_entries_still_limited(self):
        app = create_app(Settings(openai_api_key=None, chat_rate_limit=2))
        client = TestClient(app)

        statuses = [
            client.post(
                "/api/chat",
                json={"messages": []},
                headers={"x-forwarded-for": f"203.0.113.{i}, 198.51.100.7"},
            ).status_code
            for i in range(50)
        ]

        assert statuses[:2] == [500, 500]
        assert set(statuses[2:]) == {429}
        assert list(app.state.limiters["chat"]._windows) == ["198.51.100.7"]

    def test_forwarded_header_ignored_without_trusted_proxy(self):
        client = TestClient(create_app(Settings(api_rate_limit=1, trusted_proxy_hops=0)))

        assert client.get("/api/daily-prompt/1", headers={"x-forwarded-for": "10.0.0.1"}).status_code == 200
        assert client.get("/api/daily-prompt/1", headers={"x-forwarded-for": "10.0.0.2"}).status_code == 429

    def test_two_trusted_hops(self):
        client = TestClient(create_app(Settings(api_rate_limit=1, trusted_proxy_hops=2)))

        assert client.get("/api/daily-prompt/1", headers={"x-forwarded-for": "1.1.1.1, 10.0.0.5, 172.16.0.1"}).status_code == 200
        assert client.get("/api/daily-prompt/1", headers={"x-forwarded-for": "2.2.2.2, 10.0.0.5, 172.16.0.2"}).status_code == 429

    def test_window_resets(self):
        clock = FakeClock()
        limiter = FixedWindowLimiter("api", 2, 3600, "slow down", clock=clock)

        assert limiter.allow("1.2.3.4")
        assert limiter.allow("1.2.3.4")
        assert not limiter.allow("1.2.3.4")
        assert limiter.allow("5.6.7.8")

        clock.now += 3600
        assert limiter.allow("1.2.3.4")


class TestCors:

    @pytest.mark.parametrize("origin", [
        "https://reforge-backend-final.onrender.com",
        "https://my-app-123.replit.dev",
        "https://coach.replit.app",
        "exp://192.168.1.20:8081",
    ])
    def test_allowed_origins(self, origin):
        client = TestClient(create_app(Settings()))
        response = client.get("/health", headers={"origin": origin})

        assert response.headers.get("access-control-allow-origin") == origin

    def test_unknown_origin_gets_no_cors_headers(self):
        client = TestClient(create_app(Settings()))
        response = client.get("/health", headers={"origin": "https://evil.example.com"})

        assert "access-control-allow-origin" not in response.headers


class TestSettings:

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com")
        monkeypatch.setenv("CHAT_RATE_LIMIT", "5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("TRUSTED_PROXY_HOPS", "0")

        settings = Settings.from_env()

        assert settings.openai_api_key == "sk-env"
        assert settings.openai_model == "gpt-4o"
        assert settings.allowed_origins == ["https://a.example.com", "https://b.example.com"]
        assert settings.chat_rate_limit == 5
        assert settings.api_rate_limit == 100
        assert settings.log_level == "DEBUG"
        assert settings.trusted_proxy_hops == 0
        assert settings.chat_completions_url == "https://api.openai.com/v1/chat/completions"

    def test_empty_key_counts_as_missing(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "")
        assert Settings.from_env().openai_api_key is None

    def test_bad_integer(self, monkeypatch):
        monkeypatch.setenv("API_RATE_LIMIT", "lots")
        with pytest.raises(ValueError):
            Settings.from_env()

    def test_key_not_in_repr(self):
        assert "sk-secret" not in repr(Settings(openai_api_key="sk-secret"))
