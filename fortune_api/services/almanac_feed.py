"""Farmer's almanac feed: the day's solar/lunar dates, 宜/忌 and related entries.

The almanac page lays each entry out as a label cell followed by one or more
sibling cells; the value is the first following sibling with the value class.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import date
from typing import Dict, Optional

import requests

from .page_tree import Element, parse_html

logger = logging.getLogger(__name__)

DEFAULT_ALMANAC_URL = "https://www.goodaytw.com"

INFO_DATE_CLASS = "Calendar_infoDate__lSWXM"
INFO_LABEL_CLASS = "Calendar_label3__fqc0m"
ENTRY_BOX_CLASS = "Calendar_box2__2MGwH"
ENTRY_CELL_CLASS = "MuiGrid-item"
ENTRY_VALUE_CLASS = "Calendar_infoGrid2__U_osw"

LIST_SEPARATOR = "、"

# 彭祖百忌 also carries a 忌 label; its text is a saying, not a list of activities.
_PENGZU_MARKERS = ("彭祖百忌", "己不破券")

_WHITESPACE = re.compile(r"\s+")


class AlmanacSourceError(RuntimeError):
    """Raised when the almanac page cannot be fetched."""


def _joined(text: str) -> str:
    return _WHITESPACE.sub(LIST_SEPARATOR, text.strip())


def _value_after(cell: Element) -> str:
    value = cell.next_sibling_with_class(ENTRY_VALUE_CLASS)
    return value.text().strip() if value is not None else ""


def empty_almanac() -> Dict[str, str]:
    return {
        "solar": "",
        "lunar": "",
        "solar_term": "",
        "yi": "",
        "ji": "",
        "chong": "",
        "sha": "",
        "lucky_hours": "",
        "bad_gods": "",
        "direction": "",
    }


def parse_almanac_page(html: Optional[str]) -> Dict[str, str]:
    page = parse_html(html)
    result = empty_almanac()

    labels = [el.text().strip() for el in page.select(INFO_DATE_CLASS, INFO_LABEL_CLASS)]
    for i, field in enumerate(("solar", "lunar", "solar_term")):
        if i < len(labels):
            result[field] = labels[i]

    for cell in page.select(ENTRY_BOX_CLASS, ENTRY_CELL_CLASS):
        if cell.has_class(ENTRY_VALUE_CLASS):
            continue
        label = cell.text().strip()
        value = _value_after(cell)

        if "宜" in label:
            result["yi"] = _joined(value)
        if "忌" in label and not result["ji"]:
            if not any(marker in value or marker in label for marker in _PENGZU_MARKERS):
                result["ji"] = _joined(value)
        if "沖" in label:
            result["chong"] = value
        if "凶煞" in label:
            result["bad_gods"] = value
        elif "煞" in label:
            result["sha"] = value
        if "吉時" in label:
            result["lucky_hours"] = value
        if "方位" in label:
            result["direction"] = _joined(value)

    return result


def almanac_url(day: date) -> str:
    base = os.getenv("ALMANAC_SOURCE_URL", DEFAULT_ALMANAC_URL).rstrip("/")
    return f"{base}/{day.isoformat()}"


def fetch_almanac_page(day: date) -> str:
    url = almanac_url(day)
    timeout = float(os.getenv("FORTUNE_FETCH_TIMEOUT", "15"))
    logger.info("Fetching almanac page %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise AlmanacSourceError(f"Almanac page unavailable: {exc}") from exc
    if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
        resp.encoding = resp.apparent_encoding
    return resp.text
