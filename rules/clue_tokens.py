"""
提示数规则

提示匮乏 ("Clue Starved") 变体中弃牌和完成花色只得半个提示
"""
from core.constants import MAX_CLUE_NUM
from core.variants import Variant


def discard_value(variant: Variant) -> float:
    """弃一张牌获得的提示数"""
    return 0.5 if variant.clue_starved else 1


def suit_value(variant: Variant) -> float:
    """完成一个花色获得的提示数"""
    return 0.5 if variant.clue_starved else 1


def is_at_max_clue_tokens(clue_tokens: float) -> bool:
    return clue_tokens >= MAX_CLUE_NUM


def gain(clue_tokens: float, value: float) -> float:
    """获得提示, 不超过上限"""
    return min(clue_tokens + value, MAX_CLUE_NUM)


def spend(clue_tokens: float) -> float:
    """
    给出一次提示

    Raises:
        ValueError: 提示数不足一个
    """
    if clue_tokens < 1:
        raise ValueError(f"Cannot give a clue with {clue_tokens} clue tokens.")
    return clue_tokens - 1


def get_clue_tokens_after_play(
    clue_tokens: float,
    play_stack_complete: bool,
    variant: Variant,
) -> float:
    if not play_stack_complete:
        return clue_tokens
    return gain(clue_tokens, suit_value(variant))


def get_clue_tokens_after_discard(
    clue_tokens: float,
    failed: bool,
    variant: Variant,
) -> float:
    # 失误出牌不返还提示
    if failed:
        return clue_tokens
    return gain(clue_tokens, discard_value(variant))
