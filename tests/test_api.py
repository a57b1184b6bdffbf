import asyncio

import pytest
from fastapi.testclient import TestClient

from fortune_api.app import app
from fortune_api.services import fortune_service
from fortune_api.services.almanac_feed import AlmanacSourceError
from fortune_api.services.fortune_feed import FortuneSourceError
from fortune_api.services.llm_client import LLMUnavailableError, generate_text

from test_almanac_feed import SAMPLE_ALMANAC
from test_fortune_feed import SAMPLE_PAGE

client = TestClient(app)


def test_health():
    r = client.get("/__health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_sign_lookup():
    r = client.get("/v1/zodiac/sign", params={"date": "1990-04-15"})
    assert r.status_code == 200
    assert r.json()["sign_id"] == 0
    assert r.json()["name_zh"] == "牡羊座"

    r = client.get("/v1/zodiac/sign")
    assert r.json()["sign_id"] == 5


def test_compatibility_score():
    r = client.get("/v1/compatibility/score", params={"self_sign": 3, "other_sign": 0})
    assert r.status_code == 200
    assert r.json()["score"] == 65

    r = client.get("/v1/compatibility/score", params={"self_sign": 12, "other_sign": 0})
    assert r.status_code == 422


def test_best_match_endpoint():
    payload = {
        "self_birth_date": "1990-04-15",
        "candidates": [
            {"id": 1, "display_name": "Scorpio", "birth_date": "2000-11-20"},
            {"id": 2, "display_name": "Gemini", "birth_date": "1995-06-01"},
            {"id": 3, "display_name": "No birthday"},
        ],
    }
    r = client.post("/v1/compatibility/best-match", json=payload)
    assert r.status_code == 200
    j = r.json()
    assert j["self_sign"]["sign_id"] == 0
    assert j["best_match"]["person"]["id"] == 2
    assert j["best_match"]["sign"]["name"] == "Gemini"
    assert j["best_match"]["score"] == 95

    r = client.post("/v1/compatibility/best-match", json={"candidates": []})
    assert r.json()["best_match"] is None
    assert r.json()["self_sign"]["sign_id"] == 5


def test_daily_colors_endpoint():
    r = client.post("/v1/colors/daily", json={"lucky_label": "紫色", "date": "2024-01-01"})
    assert r.status_code == 200
    assert r.json() == {
        "lucky_label": "紫色",
        "lucky_hex": "#9C7CFF",
        "lucky_name": "紫色",
        "avoid_hex": "#FFA726",
        "avoid_name": "橘色",
    }


def test_daily_profile_endpoint():
    payload = {
        "self": {"id": "me", "display_name": "Me", "birth_date": "1990-04-15"},
        "candidates": [
            {"id": 1, "display_name": "Scorpio", "birth_date": "2000-11-20"},
            {"id": 2, "display_name": "Gemini", "birth_date": "1995-06-01"},
        ],
        "lucky_label": "紫色",
        "date": "2024-01-01",
    }
    r = client.post("/v1/daily/profile", json=payload)
    assert r.status_code == 200
    j = r.json()
    assert j["self"]["id"] == "me"
    assert j["date"] == "2024-01-01"
    assert j["sign"]["sign_id"] == 0
    assert j["best_match"]["person"]["id"] == 2
    assert j["colors"]["avoid_hex"] == "#FFA726"


def test_daily_fortune_endpoint(monkeypatch):
    fortune_service.clear_cache()
    calls = []

    def fake_fetch(sign_id):
        calls.append(sign_id)
        return SAMPLE_PAGE

    async def fake_generate(prompt, max_tokens=300, model=None):
        return "紫水晶, 薰衣草香氛，筆記本"

    monkeypatch.setattr(fortune_service, "fetch_fortune_page", fake_fetch)
    monkeypatch.setattr(fortune_service, "generate_text", fake_generate)

    r = client.get("/v1/fortune", params={"astro_id": 4})
    assert r.status_code == 200
    j = r.json()
    assert j["sign"]["name_zh"] == "獅子座"
    daily = j["daily"]
    assert daily["lucky_color"] == "紫色"
    assert daily["lucky_hex"] == "#9C7CFF"
    assert daily["lucky_direction_code"] == "SE"
    assert daily["lucky_time_range"] == [14 / 24, 16 / 24]
    assert daily["lucky_items"] == ["紫水晶", "薰衣草香氛", "筆記本"]
    assert daily["fortune"]["overall"]["score"] == 4

    # Same day, same sign: served from the cache.
    r = client.get("/v1/fortune", params={"astro_id": 4})
    assert r.status_code == 200
    assert calls == [4]
    fortune_service.clear_cache()


def test_daily_fortune_falls_back_when_generator_fails(monkeypatch):
    fortune_service.clear_cache()

    async def failing_generate(prompt, max_tokens=300, model=None):
        raise LLMUnavailableError("OPENAI_API_KEY is not configured")

    monkeypatch.setattr(fortune_service, "fetch_fortune_page", lambda sign_id: SAMPLE_PAGE)
    monkeypatch.setattr(fortune_service, "generate_text", failing_generate)

    r = client.get("/v1/fortune", params={"astro_id": 0})
    assert r.status_code == 200
    assert r.json()["daily"]["lucky_items"][0] == "水晶飾品"
    fortune_service.clear_cache()


def test_daily_fortune_source_error(monkeypatch):
    fortune_service.clear_cache()

    def broken_fetch(sign_id):
        raise FortuneSourceError("boom")

    monkeypatch.setattr(fortune_service, "fetch_fortune_page", broken_fetch)
    r = client.get("/v1/fortune", params={"astro_id": 1})
    assert r.status_code == 502
    assert r.json()["detail"] == "FORTUNE_SOURCE_UNAVAILABLE"


def _area(text, score):
    return {"text": text, "score": score}


def test_advice_endpoint(monkeypatch):
    prompts = []

    async def fake_generate(prompt, max_tokens=300, model=None):
        prompts.append(prompt)
        return "今天放慢腳步，好運自然來。"

    monkeypatch.setattr(fortune_service, "generate_text", fake_generate)
    payload = {
        "overall": _area("平穩", 4),
        "love": _area("甜蜜", 5),
        "work": _area("忙碌", 2),
        "wealth": _area("小有進帳", 3),
    }
    r = client.post("/v1/fortune/advice", json=payload)
    assert r.status_code == 200
    assert r.json() == {"advice": "今天放慢腳步，好運自然來。"}
    assert "- 事業：忙碌（2顆星）" in prompts[0]

    r = client.post("/v1/fortune/advice", json={"overall": _area("平穩", 4)})
    assert r.status_code == 422


def test_lucky_summary_endpoint(monkeypatch):
    async def failing_generate(prompt, max_tokens=300, model=None):
        raise LLMUnavailableError("quota")

    monkeypatch.setattr(fortune_service, "generate_text", failing_generate)
    r = client.post(
        "/v1/fortune/lucky-summary",
        json={"name": "小美", "match_score": 95, "aspects": ["工作"]},
    )
    assert r.status_code == 502

    r = client.post("/v1/fortune/lucky-summary", json={"name": "小美", "match_score": 95, "aspects": []})
    assert r.status_code == 422


def test_rate_limit_only_applies_to_fortune_routes(monkeypatch):
    from fortune_api.middleware.ratelimit import _counters

    monkeypatch.setenv("RATE_LIMIT_ENABLED", "true")
    monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "2")
    monkeypatch.setattr(fortune_service, "fetch_fortune_page", lambda sign_id: SAMPLE_PAGE)

    async def fake_generate(prompt, max_tokens=300, model=None):
        return "手環"

    monkeypatch.setattr(fortune_service, "generate_text", fake_generate)
    _counters.clear()
    with TestClient(app, raise_server_exceptions=False) as c:
        for _ in range(3):
            assert c.get("/v1/zodiac/sign", params={"date": "1990-04-15"}).status_code == 200
        statuses = [c.get("/v1/fortune", params={"astro_id": 2}).status_code for _ in range(3)]
    assert statuses == [200, 200, 429]
    _counters.clear()
    fortune_service.clear_cache()


def test_generator_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(LLMUnavailableError):
        asyncio.run(generate_text("hi"))


def test_almanac_endpoint(monkeypatch):
    fortune_service.clear_cache()
    calls = []

    def fake_fetch(day):
        calls.append(day)
        return SAMPLE_ALMANAC

    monkeypatch.delenv("ALMANAC_SOURCE_URL", raising=False)
    monkeypatch.setattr(fortune_service, "fetch_almanac_page", fake_fetch)

    r = client.get("/v1/almanac/today", params={"date": "2024-01-01"})
    assert r.status_code == 200
    j = r.json()
    assert j["date"] == "2024-01-01"
    assert j["solar_term"] == "冬至"
    assert j["yi"] == "祭祀、祈福、出行"
    assert j["ji"] == "動土、安葬"
    assert j["source"] == "https://www.goodaytw.com/2024-01-01"

    client.get("/v1/almanac/today", params={"date": "2024-01-01"})
    assert len(calls) == 1
    fortune_service.clear_cache()


def test_almanac_source_error(monkeypatch):
    fortune_service.clear_cache()

    def broken_fetch(day):
        raise AlmanacSourceError("boom")

    monkeypatch.setattr(fortune_service, "fetch_almanac_page", broken_fetch)
    r = client.get("/v1/almanac/today")
    assert r.status_code == 502
    assert r.json()["detail"] == "ALMANAC_SOURCE_UNAVAILABLE"
