"""
玩家笔记

笔记只用于玩家自我复盘, 从不影响真实的游戏状态
"""
from dataclasses import dataclass
import re


CLUED_KEYWORDS = frozenset({"cl", "clued"})
FINESSED_KEYWORDS = frozenset({"f", "finessed", "finesse", "bluff"})
UNCLUED_KEYWORDS = frozenset({"unclued", "uncl"})
KNOWN_TRASH_KEYWORDS = frozenset({"kt", "trash"})


@dataclass(frozen=True)
class CardNote:
    """解析后的笔记"""
    text: str = ""
    clued: bool = False
    finessed: bool = False
    unclued: bool = False
    known_trash: bool = False


def parse_note(text: str) -> CardNote:
    """
    解析笔记文本

    多段笔记用 "|" 分隔, 只看最后一段 (最新的判断)

    Args:
        text: 笔记原文, 如 "r1 | f"

    Returns:
        CardNote
    """
    last_part = text.split("|")[-1].strip().lower()
    # "known trash" 两个词合并处理
    last_part = last_part.replace("known trash", "kt")
    words = set(re.findall(r"[a-z]+", last_part))

    return CardNote(
        text=text,
        clued=bool(words & CLUED_KEYWORDS),
        finessed=bool(words & FINESSED_KEYWORDS),
        unclued=bool(words & UNCLUED_KEYWORDS),
        known_trash=bool(words & KNOWN_TRASH_KEYWORDS),
    )
