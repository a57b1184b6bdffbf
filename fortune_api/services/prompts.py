import re
from typing import Iterable, List, Mapping, Optional

MAX_LUCKY_ITEMS = 6

FALLBACK_LUCKY_ITEMS = ["水晶飾品", "筆記本", "香氛蠟燭", "幸運手環", "小植物", "紫色衣物"]


def lucky_items_prompt(color: str, direction: str, constellation: str) -> str:
    return f"""根據以下資訊，請你生成 {MAX_LUCKY_ITEMS} 個適合作為「今日幸運物品」的東西：
- 幸運色：{color}
- 幸運方向：{direction}
- 幸運星座：{constellation}

要求：
- 給日常生活中常見的具體物品名稱
- 與上述顏色或星座形象有關
- 用中文回答，{MAX_LUCKY_ITEMS} 個，用逗號分隔
範例格式：
水晶吊飾, 薰衣草香氛, 紫色筆記本, 幸運手環, 木質飾品, 陶瓷杯
直接生成物品就好，不用解釋
"""


def _area_line(title: str, area: Optional[Mapping]) -> str:
    area = area or {}
    return f"- {title}：{area.get('text', '')}（{area.get('score', '')}顆星）"


def advice_prompt(
    overall: Mapping, love: Mapping, work: Mapping, wealth: Mapping, health: str = "良好"
) -> str:
    lines = [
        "以下是今日的星座運勢：",
        _area_line("總覽", overall),
        _area_line("愛情", love),
        _area_line("事業", work),
        _area_line("財運", wealth),
        f"- 健康：{health}",
        "",
        "請根據以上內容，用自然中文給出一段約 2~3 句的「今日建議」，風格像貼心占卜師的語氣。",
    ]
    return "\n".join(lines) + "\n"


def lucky_summary_prompt(name: str, match_score: int, aspects: Iterable[str]) -> str:
    return f"""你是一位占星運勢分析師。
請根據以下資訊，生成一段「今日貴人總結」，語氣自然且具正能量：
- 貴人姓名：{name}
- 契合度：{match_score}%
- 今日幫助面向：{"、".join(aspects)}

要求：
- 約 1～2 句中文
- 不要太誇張或太神話
- 帶一點貼心占卜師語氣
"""


def parse_lucky_items(text: Optional[str]) -> List[str]:
    """Split a comma separated answer into at most six items."""
    items = [item.strip() for item in re.split(r"[,，]\s*", text or "")]
    items = [item for item in items if item][:MAX_LUCKY_ITEMS]
    return items or list(FALLBACK_LUCKY_ITEMS)
