"""
角色目录 ("Detrimental Characters" 选项)

只有少数角色会影响本引擎推导的状态 (例如 Contrarian 改变出牌顺序)
"""
from dataclasses import dataclass
from typing import Dict, Optional
import json

from .variants import DATA_DIR


CONTRARIAN = "Contrarian"


@dataclass(frozen=True)
class Character:
    """角色定义"""
    id: int
    name: str
    description: str


_CHARACTERS: Optional[Dict[int, Character]] = None


def _load_characters() -> Dict[int, Character]:
    global _CHARACTERS
    if _CHARACTERS is None:
        with open(DATA_DIR / "characters.json", encoding="utf-8") as f:
            _CHARACTERS = {
                entry["id"]: Character(
                    id=entry["id"],
                    name=entry["name"],
                    description=entry["description"],
                )
                for entry in json.load(f)
            }
    return _CHARACTERS


def get_character(character_id: int) -> Character:
    """
    按 ID 获取角色

    Raises:
        ValueError: 未知的角色 ID (数据错误, 不应被吞掉)
    """
    characters = _load_characters()
    if character_id not in characters:
        raise ValueError(f"Unable to find the character corresponding to ID {character_id}.")
    return characters[character_id]


def get_character_by_name(name: str) -> Character:
    for character in _load_characters().values():
        if character.name == name:
            return character
    raise ValueError(f"Unknown character: {name}")
