"""最高分 (堆分配) 测试"""
from dataclasses import replace

import numpy as np

from core.cards import initial_card_state
from core.constants import START_CARD_RANK
from core.state import StackDirection
from core.variants import get_variant
from rules import card as card_rules
from rules import deck as deck_rules
from rules import play_stacks as play_stacks_rules
from rules import reversible as reversible_rules
from rules import stats as stats_rules
from rules import sudoku as sudoku_rules


def make_deck_with_discards(variant, discarded):
    """discarded: 被弃掉的 (suit_index, rank) 列表, 每项占用一张牌"""
    deck = [
        initial_card_state(order, variant)
        for order in range(deck_rules.get_total_cards_in_deck(variant))
    ]
    for order, (suit_index, rank) in enumerate(discarded):
        deck[order] = replace(deck[order], location="discard", suit_index=suit_index, rank=rank)
    return deck


def greedy_assignment(scores, unstarted_suits, free_starts):
    """逐个花色取当前最好的起点 (不做全局优化)"""
    remaining = list(free_starts)
    result = []
    for suit_index in unstarted_suits:
        best = max(remaining, key=lambda col: scores[suit_index, col])
        result.append(int(scores[suit_index, best]))
        remaining.remove(best)
    return tuple(result)


class TestSudokuScores:
    """数独分数矩阵测试"""

    def test_partial_max_score_wraps(self):
        variant = get_variant("Sudoku (4 Suits)")
        all_discarded = np.zeros((4, 4), dtype=bool)
        all_discarded[0, 1] = True  # 红 2 全部被弃
        assert sudoku_rules.get_partial_max_score(all_discarded, 0, 1, variant) == 1
        assert sudoku_rules.get_partial_max_score(all_discarded, 0, 2, variant) == 0
        assert sudoku_rules.get_partial_max_score(all_discarded, 0, 3, variant) == 3
        assert sudoku_rules.get_partial_max_score(all_discarded, 0, 4, variant) == 2

    def test_sequence_position(self):
        variant = get_variant("Sudoku (5 Suits)")
        assert sudoku_rules.get_sequence_position(3, 3, variant) == 0
        assert sudoku_rules.get_sequence_position(1, 4, variant) == 2


class TestSudokuAssignment:
    """数独起点分配测试"""

    def test_global_beats_greedy(self):
        variant = get_variant("Sudoku (4 Suits)")
        # 黄 4 两张都被弃: 黄色只有从 1 开始才能打 3 张
        deck = make_deck_with_discards(variant, [(1, 4), (1, 4)])
        max_scores = sudoku_rules.get_max_score_per_stack(deck, (None,) * 4, variant)
        assert max_scores == (4, 3, 4, 4)

        scores = sudoku_rules.get_score_matrix(deck_rules.get_all_discarded(deck, variant), variant)
        greedy = greedy_assignment(scores, [0, 1, 2, 3], [0, 1, 2, 3])
        assert sum(greedy) < sum(max_scores)

    def test_started_stack_keeps_start(self):
        variant = get_variant("Sudoku (4 Suits)")
        deck = make_deck_with_discards(variant, [(1, 4), (1, 4)])
        max_scores = sudoku_rules.get_max_score_per_stack(deck, (None, 2, None, None), variant)
        assert max_scores == (4, 2, 4, 4)

    def test_no_discards(self):
        variant = get_variant("Sudoku (5 Suits)")
        deck = make_deck_with_discards(variant, [])
        assert sudoku_rules.get_max_score_per_stack(deck, (None,) * 5, variant) == (5,) * 5

    def test_tie_prefers_more_live_suits(self):
        scores = np.array([[3, 1], [2, 0]], dtype=np.int64)
        # (0->0, 1->1) 和 (0->1, 1->0) 总分都是 3, 后者两个花色都能得分
        assert sudoku_rules.solve_assignment(scores, [0, 1], [0, 1]) == (1, 2)

    def test_empty_assignment(self):
        scores = np.zeros((2, 2), dtype=np.int64)
        assert sudoku_rules.solve_assignment(scores, [], [0, 1]) == ()

    def test_needs_to_be_played(self):
        variant = get_variant("Sudoku (4 Suits)")
        all_discarded = np.zeros((4, 4), dtype=bool)
        all_discarded[0, 1] = True
        # 红色从 3 开始: 3, 4, 1 可达, 2 已死
        starts = (3, None, None, None)
        assert sudoku_rules.is_card_needs_to_be_played(0, 1, starts, all_discarded, variant)
        assert not sudoku_rules.is_card_needs_to_be_played(0, 2, starts, all_discarded, variant)


class TestReversible:
    """可逆方向变体测试"""

    def test_reversed_suit(self):
        variant = get_variant("Reversed (5 Suits)")
        # 倒序紫色的 4 两张都被弃: 只能打出 5
        deck = make_deck_with_discards(variant, [(4, 4), (4, 4)])
        directions = (StackDirection.UP,) * 4 + (StackDirection.DOWN,)
        assert reversible_rules.get_max_score_per_stack(deck, directions, variant) == (5, 5, 5, 5, 1)

    def test_up_or_down_start_card_replaces_five(self):
        variant = get_variant("Up or Down (5 Suits)")
        deck = make_deck_with_discards(variant, [(0, 5)])
        directions = (StackDirection.UNDECIDED,) * 5
        assert reversible_rules.get_max_score_per_stack(deck, directions, variant)[0] == 5

    def test_up_or_down_five_and_start_dead(self):
        variant = get_variant("Up or Down (5 Suits)")
        deck = make_deck_with_discards(variant, [(0, 5), (0, START_CARD_RANK)])
        directions = (StackDirection.UNDECIDED,) * 5
        assert reversible_rules.get_max_score_per_stack(deck, directions, variant)[0] == 4

    def test_finished_stack(self):
        variant = get_variant("No Variant")
        deck = make_deck_with_discards(variant, [])
        all_discarded = deck_rules.get_all_discarded(deck, variant)
        assert reversible_rules.get_max_score_for_suit(
            0, all_discarded, StackDirection.FINISHED, variant,
        ) == 5


class TestUpOrDownStartCard:
    """起始牌在底部时的剩余需要"""

    def _setup(self, stack_ranks, hand_rank):
        variant = get_variant("Up or Down (5 Suits)")
        deck = make_deck_with_discards(variant, [])
        for order, rank in enumerate(stack_ranks):
            deck[order] = replace(deck[order], location="playStack", suit_index=0, rank=rank)
        hand_order = len(stack_ranks)
        deck[hand_order] = replace(
            deck[hand_order], location=0, suit_index=0, rank=hand_rank, num_positive_clues=1,
        )
        play_stacks = (tuple(range(len(stack_ranks))),) + ((),) * 4
        directions = (
            play_stacks_rules.get_direction(0, play_stacks[0], deck, variant),
        ) + (StackDirection.UNDECIDED,) * 4
        return variant, deck, play_stacks, directions, (None,) * 5

    def test_up_still_needs_five(self):
        variant, deck, play_stacks, directions, starts = self._setup([START_CARD_RANK, 2, 3, 4], 5)
        assert directions[0] == StackDirection.UP
        assert card_rules.is_card_needs_to_be_played(0, 5, deck, play_stacks, directions, starts, variant)
        assert not card_rules.is_card_needs_to_be_played(0, 1, deck, play_stacks, directions, starts, variant)
        assert stats_rules.get_cards_gotten(
            deck, play_stacks, directions, starts, False, False, 25, variant,
        ) == 5

    def test_down_still_needs_one(self):
        variant, deck, play_stacks, directions, starts = self._setup([START_CARD_RANK, 4, 3, 2], 1)
        assert directions[0] == StackDirection.DOWN
        assert card_rules.is_card_needs_to_be_played(0, 1, deck, play_stacks, directions, starts, variant)
        assert not card_rules.is_card_needs_to_be_played(0, 5, deck, play_stacks, directions, starts, variant)
        assert stats_rules.get_cards_gotten(
            deck, play_stacks, directions, starts, False, False, 25, variant,
        ) == 5

    def test_undecided_needs_both_ends(self):
        variant, deck, play_stacks, directions, starts = self._setup([START_CARD_RANK], 5)
        assert directions[0] == StackDirection.UNDECIDED
        assert card_rules.is_card_needs_to_be_played(0, 5, deck, play_stacks, directions, starts, variant)
        assert card_rules.is_card_needs_to_be_played(0, 1, deck, play_stacks, directions, starts, variant)
        assert not card_rules.is_card_needs_to_be_played(
            0, START_CARD_RANK, deck, play_stacks, directions, starts, variant,
        )
