"""统计计算测试"""
import math
from dataclasses import replace

import pytest

from core.cards import initial_card_state
from core.notes import parse_note
from core.state import PaceRisk, StackDirection
from core.variants import get_variant
from rules import deck as deck_rules
from rules import stats as stats_rules


def make_deck(variant, cards=()):
    """
    创建牌状态列表

    Args:
        cards: (order, location, suit_index, rank, num_positive_clues) 列表
    """
    deck = [
        initial_card_state(order, variant)
        for order in range(deck_rules.get_total_cards_in_deck(variant))
    ]
    for order, location, suit_index, rank, num_positive_clues in cards:
        deck[order] = replace(
            deck[order],
            location=location,
            suit_index=suit_index,
            rank=rank,
            num_positive_clues=num_positive_clues,
        )
    return deck


def empty_stacks(variant):
    num_suits = len(variant.suits)
    return (
        tuple(() for _ in range(num_suits)),
        (StackDirection.UP,) * num_suits,
        (None,) * num_suits,
    )


class TestPace:
    """pace 测试"""

    def test_two_player_start(self):
        assert stats_rules.get_pace(0, 40, 25, 2, False) == 17

    def test_game_over_is_none(self):
        assert stats_rules.get_pace(0, 40, 25, 2, True) is None

    def test_empty_deck_is_none(self):
        assert stats_rules.get_pace(20, 0, 25, 2, False) is None
        assert stats_rules.get_pace(20, -1, 25, 2, False) is None

    @pytest.mark.parametrize("score,deck_size,max_score,end_game_length", [
        (0, 1, 25, 2),
        (10, 15, 25, 3),
        (24, 3, 24, 5),
        (5, 30, 30, 6),
    ])
    def test_formula(self, score, deck_size, max_score, end_game_length):
        pace = stats_rules.get_pace(score, deck_size, max_score, end_game_length, False)
        assert pace == score + deck_size - max_score + end_game_length

    def test_starting_pace(self):
        variant = get_variant("No Variant")
        deck_size = stats_rules.get_starting_deck_size(2, 5, variant)
        assert deck_size == 40
        assert stats_rules.get_starting_pace(deck_size, variant.max_score, 2) == 17


class TestPaceRisk:
    """pace 风险测试"""

    def test_none_is_low(self):
        assert stats_rules.get_pace_risk(None, 4) == PaceRisk.LOW

    def test_zero(self):
        assert stats_rules.get_pace_risk(0, 2) == PaceRisk.ZERO
        assert stats_rules.get_pace_risk(-3, 2) == PaceRisk.ZERO

    def test_buckets_four_players(self):
        # 4 人: pace < 2 为 High, pace < 4 为 Medium
        assert stats_rules.get_pace_risk(1, 4) == PaceRisk.HIGH
        assert stats_rules.get_pace_risk(2, 4) == PaceRisk.MEDIUM
        assert stats_rules.get_pace_risk(3, 4) == PaceRisk.MEDIUM
        assert stats_rules.get_pace_risk(4, 4) == PaceRisk.LOW

    @pytest.mark.parametrize("num_players", [2, 3, 4, 5, 6])
    def test_monotonic(self, num_players):
        order = [PaceRisk.LOW, PaceRisk.MEDIUM, PaceRisk.HIGH, PaceRisk.ZERO]
        levels = [
            order.index(stats_rules.get_pace_risk(pace, num_players))
            for pace in range(20, -5, -1)
        ]
        assert levels == sorted(levels)

    @pytest.mark.parametrize("num_players", [2, 3, 4, 5, 6])
    def test_every_pace_has_a_bucket(self, num_players):
        for pace in range(-10, 30):
            assert stats_rules.get_pace_risk(pace, num_players) in PaceRisk


class TestCluesStillUsable:
    """剩余可用提示测试"""

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            stats_rules.get_clues_still_usable_not_rounded(
                0, [0] * 5, [5] * 4, 5, 40, 2, 1, 1, 8,
            )

    def test_discard_value_below_suit_value_raises(self):
        with pytest.raises(ValueError):
            stats_rules.get_clues_still_usable_not_rounded(
                0, [0] * 5, [5] * 5, 5, 40, 2, 0.5, 1, 8,
            )

    def test_raises_even_with_empty_deck(self):
        with pytest.raises(ValueError):
            stats_rules.get_clues_still_usable_not_rounded(
                0, [0] * 5, [5] * 4, 5, 0, 2, 1, 1, 8,
            )

    def test_empty_deck_is_none(self):
        assert stats_rules.get_clues_still_usable_not_rounded(
            20, [4] * 5, [5] * 5, 5, 0, 2, 1, 1, 3,
        ) is None
        assert stats_rules.get_clues_still_usable(
            20, [4] * 5, [5] * 5, 5, 0, 2, 1, 1, 3,
        ) is None

    def test_two_player_start(self):
        # 17 次弃牌 + 4 个花色 + 8 个提示
        result = stats_rules.get_clues_still_usable_not_rounded(
            0, [0] * 5, [5] * 5, 5, 40, 2, 1, 1, 8,
        )
        assert result == 29

    def test_clue_starved_is_floored(self):
        not_rounded = stats_rules.get_clues_still_usable_not_rounded(
            0, [0] * 5, [5] * 5, 5, 40, 2, 0.5, 0.5, 8,
        )
        assert not_rounded == 17 * 0.5 + 4 * 0.5 + 8
        rounded = stats_rules.get_clues_still_usable(
            0, [0] * 5, [5] * 5, 5, 40, 2, 0.5, 0.5, 8,
        )
        assert rounded == math.floor(not_rounded)

    def test_dead_suits_are_not_completable(self):
        # 有一个花色最多只能到 3, 它不算可以完成的花色
        result = stats_rules.get_clues_still_usable_not_rounded(
            0, [0] * 5, [5, 5, 5, 5, 3], 5, 40, 2, 1, 1, 8,
        )
        # 缺 23 张: 最后一轮前可弃 19 张; 最后一轮前至少打 20 张, 完成 4 个花色
        assert result == 19 + 4 + 8


class TestEfficiency:
    """效率测试"""

    def test_starting_clues_usable(self):
        variant = get_variant("No Variant")
        assert stats_rules.get_starting_clues_usable(2, 40, variant) == 29
        assert stats_rules.get_starting_clues_usable(3, 35, variant) == 25

    def test_min_efficiency(self):
        variant = get_variant("No Variant")
        assert stats_rules.get_min_efficiency(2, 2, variant, 5) == pytest.approx(25 / 29)
        assert stats_rules.get_min_efficiency(3, 3, variant, 5) == pytest.approx(1.0)

    def test_efficiency_ratio(self):
        assert stats_rules.get_efficiency(6, 4) == 1.5

    def test_efficiency_zero_denominator_is_callers_problem(self):
        with pytest.raises(ZeroDivisionError):
            stats_rules.get_efficiency(3, 0)


class TestMaxScorePerStack:
    """最高分分派测试"""

    def test_default_variant(self):
        variant = get_variant("No Variant")
        deck = make_deck(variant)
        _, directions, starts = empty_stacks(variant)
        assert stats_rules.get_max_score_per_stack(deck, directions, starts, variant) == (5,) * 5

    def test_dead_card_caps_stack(self):
        variant = get_variant("No Variant")
        # 两张红 3 都被弃掉
        deck = make_deck(variant, [
            (0, "discard", 0, 3, 0),
            (1, "discard", 0, 3, 0),
        ])
        _, directions, starts = empty_stacks(variant)
        assert stats_rules.get_max_score_per_stack(deck, directions, starts, variant) == (2, 5, 5, 5, 5)


class TestCardsGotten:
    """拿到的牌数测试"""

    def _setup(self):
        variant = get_variant("No Variant")
        deck = make_deck(variant, [
            (0, "playStack", 0, 1, 0),
            (1, "playStack", 0, 2, 0),
            (2, "playStack", 0, 3, 0),
            (3, 0, 1, 1, 1),
            (4, 1, 3, 1, 1),
            # 未被提示的牌不算
            (5, 1, 2, 1, 0),
        ])
        play_stacks = ((0, 1, 2), (), (), (), ())
        directions = (StackDirection.UP,) * 5
        starts = (None,) * 5
        return variant, deck, play_stacks, directions, starts

    def test_played_plus_clued(self):
        variant, deck, play_stacks, directions, starts = self._setup()
        assert stats_rules.get_cards_gotten(
            deck, play_stacks, directions, starts, False, False, 25, variant,
        ) == 5

    def test_clamped_to_max_score(self):
        variant, deck, play_stacks, directions, starts = self._setup()
        assert stats_rules.get_cards_gotten(
            deck, play_stacks, directions, starts, False, False, 4, variant,
        ) == 4

    def test_known_trash_not_gotten(self):
        variant, deck, play_stacks, directions, starts = self._setup()
        # 手牌中被提示过的红 2 已经打出
        deck[6] = replace(deck[6], location=0, suit_index=0, rank=2, num_positive_clues=1)
        assert stats_rules.get_cards_gotten(
            deck, play_stacks, directions, starts, False, False, 25, variant,
        ) == 5

    def test_throw_it_in_a_hole_misplays(self):
        variant = get_variant("Throw It in a Hole (5 Suits)")
        deck = make_deck(variant, [(0, "discard", 0, 1, 0)])
        deck[0] = replace(deck[0], is_misplayed=True)
        play_stacks, directions, starts = empty_stacks(variant)
        assert stats_rules.get_cards_gotten(
            deck, play_stacks, directions, starts, True, False, 25, variant,
        ) == 1
        assert stats_rules.get_cards_gotten(
            deck, play_stacks, directions, starts, False, False, 25, variant,
        ) == 0


class TestCardsGottenByNotes:
    """笔记修正测试"""

    def test_adjustments(self):
        variant = get_variant("No Variant")
        deck = make_deck(variant, [
            (0, 0, 0, 1, 1),
            (1, 0, 1, 1, 0),
            (2, 0, 2, 1, 0),
        ])
        notes = [None] * len(deck)
        # 已提示, 笔记说是垃圾: -1
        notes[0] = parse_note("kt")
        # 未提示, 笔记说是飞牌: +1
        notes[1] = parse_note("r1 | f")
        # 未提示, 笔记说未提示: 0
        notes[2] = parse_note("unclued")
        play_stacks, directions, starts = empty_stacks(variant)
        assert stats_rules.get_cards_gotten_by_notes(
            deck, play_stacks, directions, starts, variant, notes,
        ) == 0

        notes[0] = None
        assert stats_rules.get_cards_gotten_by_notes(
            deck, play_stacks, directions, starts, variant, notes,
        ) == 1
