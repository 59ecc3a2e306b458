"""
数独变体的最大分数计算

规则:
- 每个花色可以从任意牌面值开始, 向上打, 到顶后回到 1
- 不同花色的起始牌面值互不相同
- 已开始的花色起点固定, 未开始的花色需要分配剩余的起点

最大分数需要求解一个分配问题: 把未使用的起点分配给未开始的花色,
使总分最大 (并列时优先让更多花色仍可得分)
"""
from itertools import permutations
from typing import List, Optional, Sequence, Tuple
import numpy as np

from core.cards import CardState
from core.variants import Variant

from . import deck as deck_rules


def get_sequence_position(rank: int, start_rank: int, variant: Variant) -> int:
    """从 start_rank 开始时, rank 在出牌序列中的位置"""
    return (variant.rank_index(rank) - variant.rank_index(start_rank)) % variant.stack_size


def get_partial_max_score(
    all_discarded: np.ndarray,
    suit_index: int,
    start_rank: int,
    variant: Variant,
) -> int:
    """
    从 start_rank 开始时该花色最多还能打到的张数

    Args:
        all_discarded: (num_suits, num_ranks) 布尔数组
        suit_index: 花色索引
        start_rank: 起始牌面值
        variant: 变体
    """
    start_index = variant.rank_index(start_rank)
    score = 0
    for offset in range(variant.stack_size):
        rank_index = (start_index + offset) % variant.stack_size
        if all_discarded[suit_index, rank_index]:
            break
        score += 1
    return score


def get_score_matrix(all_discarded: np.ndarray, variant: Variant) -> np.ndarray:
    """
    每个 (花色, 起点) 组合的最大分数

    Returns:
        (num_suits, num_ranks) 整数数组
    """
    scores = np.zeros((len(variant.suits), len(variant.ranks)), dtype=np.int64)
    for suit_index in range(len(variant.suits)):
        for rank_index, start_rank in enumerate(variant.ranks):
            scores[suit_index, rank_index] = get_partial_max_score(
                all_discarded, suit_index, start_rank, variant,
            )
    return scores


def solve_assignment(
    scores: np.ndarray,
    unstarted_suits: Sequence[int],
    free_starts: Sequence[int],
) -> Tuple[int, ...]:
    """
    穷举所有分配, 返回最优分配下每个未开始花色的分数

    比较键为 (总分, 仍可得分的花色数); 并列时取字典序第一个

    Args:
        scores: (num_suits, num_ranks) 分数矩阵
        unstarted_suits: 未开始的花色索引
        free_starts: 未被占用的起点 (列索引)

    Returns:
        与 unstarted_suits 对齐的分数
    """
    if not unstarted_suits:
        return ()

    rows = np.array(unstarted_suits, dtype=np.int64)
    best_key: Optional[Tuple[int, int]] = None
    best_scores: Tuple[int, ...] = (0,) * len(unstarted_suits)

    for assignment in permutations(free_starts, len(unstarted_suits)):
        assigned = scores[rows, np.array(assignment, dtype=np.int64)]
        key = (int(assigned.sum()), int(np.count_nonzero(assigned)))
        if best_key is None or key > best_key:
            best_key = key
            best_scores = tuple(int(v) for v in assigned)

    return best_scores


def get_max_score_per_stack(
    deck: Sequence[CardState],
    play_stack_starts: Sequence[Optional[int]],
    variant: Variant,
) -> Tuple[int, ...]:
    """
    数独变体每个花色的最大可达分数

    Args:
        deck: 牌状态
        play_stack_starts: 各花色起点 (未开始为 None)
        variant: 变体

    Returns:
        每个花色的最高分
    """
    all_discarded = deck_rules.get_all_discarded(deck, variant)
    scores = get_score_matrix(all_discarded, variant)

    max_scores: List[int] = [0] * len(variant.suits)
    unstarted_suits: List[int] = []
    used_starts = set()

    for suit_index, start_rank in enumerate(play_stack_starts):
        if start_rank is None:
            unstarted_suits.append(suit_index)
            continue
        max_scores[suit_index] = int(scores[suit_index, variant.rank_index(start_rank)])
        used_starts.add(start_rank)

    free_starts = [
        rank_index for rank_index, rank in enumerate(variant.ranks)
        if rank not in used_starts
    ]
    assigned = solve_assignment(scores, unstarted_suits, free_starts)
    for suit_index, score in zip(unstarted_suits, assigned):
        max_scores[suit_index] = score

    return tuple(max_scores)


def is_card_needs_to_be_played(
    suit_index: int,
    rank: int,
    play_stack_starts: Sequence[Optional[int]],
    all_discarded: np.ndarray,
    variant: Variant,
) -> bool:
    """
    尚未打出的牌是否仍可能被打出

    未开始的花色: 只要存在一个可用起点使其可达即可
    """
    start_rank = play_stack_starts[suit_index]
    if start_rank is not None:
        position = get_sequence_position(rank, start_rank, variant)
        return position < get_partial_max_score(all_discarded, suit_index, start_rank, variant)

    used_starts = {start for start in play_stack_starts if start is not None}
    for candidate in variant.ranks:
        if candidate in used_starts:
            continue
        position = get_sequence_position(rank, candidate, variant)
        if position < get_partial_max_score(all_discarded, suit_index, candidate, variant):
            return True
    return False
