"""
回合规则 - 下一位玩家、最后一轮长度、角色对出牌顺序的影响
"""
from typing import Optional

from core.characters import CONTRARIAN, Character, get_character
from core.state import GameMetadata


def get_next_player_index(
    current_player_index: Optional[int],
    num_players: int,
    play_order_inverted: bool = False,
) -> Optional[int]:
    """
    下一位玩家

    Args:
        current_player_index: 当前玩家 (游戏结束为 None)
        num_players: 玩家数
        play_order_inverted: 出牌顺序是否反转

    Returns:
        下一位玩家索引, 游戏结束时仍为 None
    """
    if current_player_index is None:
        return None
    if play_order_inverted:
        return (current_player_index - 1) % num_players
    return (current_player_index + 1) % num_players


def should_play_order_invert(character: Optional[Character]) -> bool:
    """该角色每回合结束后反转出牌顺序"""
    return character is not None and character.name == CONTRARIAN


def get_player_character(metadata: GameMetadata, player_index: int) -> Optional[Character]:
    if not metadata.options.detrimental_characters:
        return None
    if player_index >= len(metadata.character_assignments):
        return None
    character_id = metadata.character_assignments[player_index]
    if character_id is None:
        return None
    return get_character(character_id)


def get_end_game_length(metadata: GameMetadata) -> int:
    """
    牌堆抽空后还能进行的回合数

    通常每位玩家各一回合; 有 Contrarian 时出牌顺序来回反转, 只剩 2 回合
    """
    if metadata.options.detrimental_characters:
        for player_index in range(metadata.num_players):
            if should_play_order_invert(get_player_character(metadata, player_index)):
                return 2
    return metadata.num_players
