from __future__ import annotations

import pytest
import requests

from fortune_api.services import fortune_feed
from fortune_api.services.fortune_feed import (
    parse_fortune_page,
    score_from_style,
    split_time_and_color,
    star_string,
)

SAMPLE_PAGE = """
<html><head><meta charset="utf-8"><title>今日運勢</title></head>
<body>
  <div class="TODAY_CONTENT">
    <div id="astroDailyScore_all" style="background:url(/images/score_all4.png) no-repeat"></div>
    <p id="astroDailyData_all"><span>整體運</span>今天適合整理思緒，整體運勢平穩。</p>
    <div id="astroDailyScore_love" style="background:url(/images/score_love9.png)"></div>
    <p id="astroDailyData_love">愛情運 單身者有機會認識新朋友。<br>有伴者宜多溝通。</p>
    <div id="astroDailyScore_career" style="background:url(/images/score_career2.png)"></div>
    <p id="astroDailyData_career">事業運 工作上容易分心。</p>
    <p id="astroDailyData_money">財運 小有進帳。</p>
    <ul>
      <li id="astroDailyData_luckyNum">幸運數字：7</li>
      <li id="astroDailyData_luckyTC">吉時吉色：14:00-16:00&nbsp;紫色</li>
      <li id="astroDailyData_luckyDir">開運方位：東南方</li>
      <li id="astroDailyData_vip">貴人星座：<b>獅子座</b></li>
    </ul>
  </div>
</body></html>
"""


def test_parse_fortune_page():
    data = parse_fortune_page(SAMPLE_PAGE)

    assert data["lucky_number"] == "7"
    assert data["lucky_direction"] == "東南方"
    assert data["lucky_constellation"] == "獅子座"
    assert data["lucky_time"] == "14:00-16:00"
    assert data["lucky_color"] == "紫色"

    fortune = data["fortune"]
    assert fortune["overall"] == {"score": 4, "stars": "★★★★", "text": "今天適合整理思緒，整體運勢平穩。"}
    assert fortune["love"]["score"] == 5
    assert fortune["love"]["text"] == "單身者有機會認識新朋友。有伴者宜多溝通。"
    assert fortune["work"]["score"] == 2
    assert fortune["work"]["text"] == "工作上容易分心。"
    # No score element for wealth on this page.
    assert fortune["wealth"]["score"] == 3
    assert fortune["wealth"]["text"] == "小有進帳。"


def test_parse_empty_page():
    data = parse_fortune_page("")
    assert data["lucky_number"] == ""
    assert data["lucky_time"] == "無"
    assert data["lucky_color"] == "無"
    assert all(area["score"] == 3 for area in data["fortune"].values())


def test_parse_page_with_unclosed_list_items():
    page = """
    <ul>
      <li id="astroDailyData_luckyNum">幸運數字：7
      <li id="astroDailyData_luckyDir">開運方位：東南方
      <li id="astroDailyData_luckyTC">吉時吉色：紫色
    </ul>
    <p id="astroDailyData_all">整體運 平穩
    <p id="astroDailyData_love">愛情運 甜蜜
    <div id="astroDailyScore_love" style="background:url(score_love2.png)"></div>
    """
    data = parse_fortune_page(page)

    assert data["lucky_number"] == "7"
    assert data["lucky_direction"] == "東南方"
    assert data["lucky_time"] == ""
    assert data["lucky_color"] == "紫色"
    assert data["fortune"]["overall"]["text"] == "平穩"
    assert data["fortune"]["love"] == {"score": 2, "stars": "★★", "text": "甜蜜"}


def test_score_from_style():
    assert score_from_style("background:url(score_money1.png)") == 1
    assert score_from_style("background:url(score_all8.png)") == 5
    assert score_from_style("") == 3
    assert score_from_style(None) == 3


def test_star_string():
    assert star_string(0) == ""
    assert star_string(3) == "★★★"
    assert star_string(7) == "★★★★★"


def test_split_time_and_color():
    assert split_time_and_color("09:00-11:00 黃色") == ("09:00-11:00", "黃色")
    assert split_time_and_color("09:00-11:00  淺藍 其他") == ("09:00-11:00", "淺藍")
    assert split_time_and_color("09:00-11:00檸檬黃") == ("09:00-11:00", "檸檬黃")
    assert split_time_and_color("紫色") == ("", "紫色")
    assert split_time_and_color("") == ("無", "無")
    assert split_time_and_color("09:00") == ("無", "無")


class _FakeResponse:
    def __init__(self, text, status=200, encoding="utf-8"):
        self.text = text
        self.status_code = status
        self.encoding = encoding
        self.apparent_encoding = "utf-8"

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_fetch_uses_shifted_sign_number(monkeypatch):
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen.update(url=url, params=params, timeout=timeout)
        return _FakeResponse("<html></html>")

    monkeypatch.setenv("FORTUNE_FETCH_TIMEOUT", "3")
    monkeypatch.delenv("FORTUNE_SOURCE_URL", raising=False)
    monkeypatch.setattr(fortune_feed.requests, "get", fake_get)
    assert fortune_feed.fetch_fortune_page(11) == "<html></html>"
    assert seen["params"] == {"astroNum": 0}
    assert seen["timeout"] == 3.0
    assert seen["url"] == fortune_feed.DEFAULT_SOURCE_URL


def test_fetch_errors_become_source_errors(monkeypatch):
    def refused(url, params=None, timeout=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(fortune_feed.requests, "get", refused)
    with pytest.raises(fortune_feed.FortuneSourceError):
        fortune_feed.fetch_fortune_page(0)

    monkeypatch.setattr(fortune_feed.requests, "get", lambda *a, **kw: _FakeResponse("", status=503))
    with pytest.raises(fortune_feed.FortuneSourceError):
        fortune_feed.fetch_fortune_page(0)
