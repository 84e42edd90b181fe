# server/tests/test_daily.py
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.services.daily_content import DAILY_PROMPTS, MILESTONES

client = TestClient(create_app(Settings(openai_api_key=None, api_rate_limit=1000)))


class TestDailyPrompt:

    def test_literal_prompt(self):
        response = client.get("/api/daily-prompt/1")

        assert response.status_code == 200
        assert response.json()["prompt"].startswith("Day 1: You're not starting over")

    def test_fallback_prompt(self):
        response = client.get("/api/daily-prompt/2")

        assert response.status_code == 200
        prompt = response.json()["prompt"]
        assert "Day 2" in prompt
        assert prompt == "Day 2: Show up. Do the work. Trust the process. That's how transformation happens."

    def test_every_day_has_a_prompt(self):
        for day in range(1, 31):
            response = client.get(f"/api/daily-prompt/{day}")
            assert response.status_code == 200
            assert response.json()["prompt"].startswith(f"Day {day}:")
        assert set(DAILY_PROMPTS) == {1, 5, 10, 15, 20, 25, 30}

    def test_out_of_range_day(self):
        for day in ("0", "31", "-3"):
            response = client.get(f"/api/daily-prompt/{day}")
            assert response.status_code == 400
            assert response.json() == {"error": "Invalid day number"}

    def test_non_numeric_day(self):
        response = client.get("/api/daily-prompt/abc")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid day number"}

    @pytest.mark.parametrize("day", ["5abc", "1.5", "1e1"])
    def test_partially_numeric_day_rejected(self, day):
        response = client.get(f"/api/daily-prompt/{day}")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid day number"}


class TestMilestone:

    def test_known_milestone(self):
        response = client.get("/api/milestone/15")

        assert response.status_code == 200
        assert response.json() == {
            "title": "Halfway There",
            "message": MILESTONES[15]["message"],
            "icon": "award",
        }

    def test_day_without_milestone(self):
        response = client.get("/api/milestone/7")

        assert response.status_code == 404
        assert response.json() == {"error": "No milestone for this day"}

    def test_non_numeric_day(self):
        response = client.get("/api/milestone/soon")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid day number"}
