"""reducer 测试"""
from dataclasses import dataclass, replace

import pytest

from core.actions import (
    CardIdentityAction,
    Clue,
    ClueAction,
    DiscardAction,
    DrawAction,
    GameOverAction,
    NoteAction,
    PlayAction,
)
from core.constants import MAX_CLUE_NUM
from core.state import EndCondition, GameMetadata, GameOptions, PaceRisk, StackDirection
from reducers import fold_actions, game_reducer, initial_game_state
from rules import stats as stats_rules


def deal(hands):
    """按玩家顺序发牌, hands: 每位玩家的 (suit_index, rank) 列表"""
    actions = []
    order = 0
    for player_index, cards in enumerate(hands):
        for suit_index, rank in cards:
            actions.append(DrawAction(player_index, order, suit_index, rank))
            order += 1
    return actions


def two_player_game(variant_name="No Variant"):
    metadata = GameMetadata(options=GameOptions(num_players=2, variant_name=variant_name))
    hands = [
        [(0, 4), (1, 1), (1, 2), (2, 1), (2, 2)],
        [(3, 1), (3, 1), (3, 2), (3, 2), (3, 3)],
    ]
    state = fold_actions(initial_game_state(metadata), deal(hands), metadata)
    return metadata, state


class TestInitialState:
    """初始状态测试"""

    def test_all_cards_in_deck(self):
        metadata = GameMetadata(options=GameOptions(num_players=2))
        state = initial_game_state(metadata)
        assert len(state.deck) == 50
        assert state.cards_remaining_in_the_deck == 50
        assert all(card.location == "deck" for card in state.deck)
        assert state.hands == ((), ())
        assert state.clue_tokens == MAX_CLUE_NUM
        assert state.turn.current_player_index == 0

    def test_initial_stats(self):
        metadata = GameMetadata(options=GameOptions(num_players=2))
        stats = initial_game_state(metadata).stats
        assert stats.max_score == 25
        assert stats.pace == 17
        assert stats.pace_risk == PaceRisk.LOW
        assert stats.efficiency is None
        assert stats.clues_still_usable == 29
        assert stats.future_efficiency == pytest.approx(25 / 29)
        assert stats.double_discard is None

    def test_up_or_down_directions(self):
        metadata = GameMetadata(options=GameOptions(variant_name="Up or Down (5 Suits)"))
        state = initial_game_state(metadata)
        assert state.play_stack_directions == (StackDirection.UNDECIDED,) * 5


class TestDeal:
    """发牌测试"""

    def test_hands_newest_first(self):
        _, state = two_player_game()
        assert state.hands[0] == (4, 3, 2, 1, 0)
        assert state.hands[1] == (9, 8, 7, 6, 5)
        assert state.cards_remaining_in_the_deck == 40
        assert state.deck[0].dealt_to_starting_hand
        assert state.deck[0].location == 0

    def test_pace_after_deal(self):
        _, state = two_player_game()
        assert state.stats.pace == 17
        assert state.turn.segment == 0


class TestPlay:
    """出牌测试"""

    def test_play_moves_card(self):
        metadata, state = two_player_game()
        state = game_reducer(state, PlayAction(0, 1, 1, 1), metadata)
        assert state.play_stacks[1] == (1,)
        assert 1 not in state.hands[0]
        assert state.deck[1].location == "playStack"
        assert state.score == 1
        assert state.turn.current_player_index == 1
        assert state.turn.turn_num == 1
        assert state.turn.segment == 1
        assert state.stats.cards_gotten == 1

    def test_card_not_in_hand_raises(self):
        metadata, state = two_player_game()
        with pytest.raises(ValueError):
            game_reducer(state, PlayAction(0, 5, 3, 1), metadata)

    def test_input_state_unchanged(self):
        metadata, state = two_player_game()
        before = state
        game_reducer(state, PlayAction(0, 1, 1, 1), metadata)
        assert state == before
        assert state.play_stacks[1] == ()


class TestClue:
    """提示测试"""

    def test_clue_spends_token(self):
        metadata, state = two_player_game()
        state = game_reducer(state, ClueAction(0, 1, Clue.rank(1), (6, 5)), metadata)
        assert state.clue_tokens == MAX_CLUE_NUM - 1
        assert len(state.clues) == 1
        clue = state.clues[0]
        assert clue.touched == (6, 5)
        assert clue.negative == (9, 8, 7)
        assert clue.segment == 0
        assert state.deck[5].num_positive_clues == 1
        assert state.deck[5].positive_rank_clues == (1,)
        assert state.deck[5].segment_first_clued == 0
        assert all(rank == 1 for _, rank in state.deck[5].possible_cards_from_clues)
        assert all(rank != 1 for _, rank in state.deck[9].possible_cards_from_clues)
        assert state.stats.potential_clues_lost == 1

    def test_clue_without_tokens_raises(self):
        metadata, state = two_player_game()
        for i in range(MAX_CLUE_NUM):
            giver = i % 2
            state = game_reducer(
                state,
                ClueAction(giver, 1 - giver, Clue.color(0), ()),
                metadata,
            )
        assert state.clue_tokens == 0
        with pytest.raises(ValueError):
            game_reducer(state, ClueAction(0, 1, Clue.color(0), ()), metadata)

    def test_invalid_clue_raises(self):
        metadata, state = two_player_game()
        with pytest.raises(ValueError, match="Invalid clue"):
            game_reducer(state, ClueAction(0, 1, Clue.color(9), ()), metadata)
        with pytest.raises(ValueError, match="Invalid clue"):
            game_reducer(state, ClueAction(0, 1, Clue.rank(6), ()), metadata)

    def test_efficiency(self):
        metadata, state = two_player_game()
        state = game_reducer(state, ClueAction(0, 1, Clue.color(3), (9, 8, 7, 6, 5)), metadata)
        assert state.stats.cards_gotten == 5
        assert state.stats.efficiency == 5


class TestDiscard:
    """弃牌与失误测试"""

    def test_misplay_records_strike(self):
        metadata, state = two_player_game()
        state = game_reducer(state, DiscardAction(0, 0, 0, 4, failed=True), metadata)
        assert len(state.strikes) == 1
        assert state.strikes[0].order == 0
        assert state.deck[0].is_misplayed
        assert state.discard_stacks[0] == (0,)
        assert state.clue_tokens == MAX_CLUE_NUM
        assert state.stats.potential_clues_lost == 1

    def test_three_strikes_end_game(self):
        metadata, state = two_player_game()
        actions = [
            DiscardAction(0, 0, 0, 4, failed=True),
            DiscardAction(1, 9, 3, 3, failed=True),
            DiscardAction(0, 1, 1, 1, failed=True),
        ]
        state = fold_actions(state, actions, metadata)
        assert state.turn.end_condition == EndCondition.STRIKEOUT
        assert state.is_game_over
        assert state.stats.pace is None

    def test_discard_gains_clue(self):
        metadata, state = two_player_game()
        state = game_reducer(state, ClueAction(0, 1, Clue.color(3), (9, 8, 7, 6, 5)), metadata)
        state = game_reducer(state, DiscardAction(1, 9, 3, 3), metadata)
        assert state.clue_tokens == MAX_CLUE_NUM
        state = game_reducer(state, DrawAction(1, 10, 4, 1), metadata)
        assert state.stats.pace == 16


class TestDoubleDiscard:
    """双弃测试"""

    def test_last_copy_of_needed_card(self):
        metadata, state = two_player_game()
        state = game_reducer(state, DiscardAction(0, 0, 0, 4), metadata)
        assert state.stats.double_discard == 0
        # 抽牌不会清除
        state = game_reducer(state, DrawAction(0, 10, 4, 1), metadata)
        assert state.stats.double_discard == 0
        # 下一个回合结束后清除
        state = game_reducer(state, ClueAction(1, 0, Clue.rank(1), (10, 1, 3)), metadata)
        assert state.stats.double_discard is None

    def test_next_player_locked(self):
        metadata, state = two_player_game()
        state = game_reducer(state, ClueAction(0, 1, Clue.color(3), (9, 8, 7, 6, 5)), metadata)
        state = game_reducer(state, ClueAction(1, 0, Clue.rank(1), (3, 1)), metadata)
        state = game_reducer(state, DiscardAction(0, 0, 0, 4), metadata)
        assert state.stats.double_discard is None

    def test_not_needed(self):
        metadata, state = two_player_game()
        # 蓝 1 还剩两张, 弃掉不构成双弃
        state = game_reducer(state, ClueAction(0, 1, Clue.rank(1), (6, 5)), metadata)
        state = game_reducer(state, DiscardAction(1, 5, 3, 1), metadata)
        assert state.stats.double_discard is None

    def test_locked_hand_function(self):
        metadata, state = two_player_game()
        state = game_reducer(state, DiscardAction(0, 0, 0, 4), metadata)
        view = replace(state, turn=replace(state.turn, current_player_index=0))
        assert stats_rules.get_double_discard_card(0, view, metadata.variant) == 0

        deck = tuple(
            replace(card, num_positive_clues=1) if card.order in view.hands[1] else card
            for card in view.deck
        )
        locked = replace(view, deck=deck)
        assert stats_rules.get_double_discard_card(0, locked, metadata.variant) is None


class TestFinalRound:
    """最后一轮测试"""

    def test_end_turn_set_when_deck_empties(self):
        metadata = GameMetadata(options=GameOptions(num_players=2, variant_name="3 Suits"))
        # 3 花色共 30 张, 发完 10 张后剩 20 张
        hands = [[(0, 1)] * 3 + [(0, 2)] * 2, [(1, 1)] * 3 + [(1, 2)] * 2]
        state = fold_actions(initial_game_state(metadata), deal(hands), metadata)
        player = 0
        order = 10
        while state.cards_remaining_in_the_deck > 0:
            discarded = state.hands[player][-1]
            card = state.deck[discarded]
            state = game_reducer(state, DiscardAction(player, discarded, card.suit_index, card.rank), metadata)
            state = game_reducer(state, DrawAction(player, order), metadata)
            order += 1
            player = 1 - player

        assert state.turn.end_turn_num == state.turn.turn_num + 2
        assert state.stats.pace is None
        assert not state.is_game_over

        for _ in range(2):
            discarded = state.hands[player][-1]
            card = state.deck[discarded]
            state = game_reducer(state, DiscardAction(player, discarded, card.suit_index, card.rank), metadata)
            player = 1 - player
        assert state.is_game_over
        assert state.turn.end_condition == EndCondition.NORMAL


class TestContrarian:
    """Contrarian 角色测试"""

    def test_play_order_inverts(self):
        metadata = GameMetadata(
            options=GameOptions(num_players=3, detrimental_characters=True),
            character_assignments=(21, None, None),
        )
        state = initial_game_state(metadata)
        state = game_reducer(state, ClueAction(0, 1, Clue.color(0), ()), metadata)
        assert state.turn.play_order_inverted
        assert state.turn.current_player_index == 2
        state = game_reducer(state, ClueAction(2, 1, Clue.color(0), ()), metadata)
        assert state.turn.current_player_index == 1


class TestNotesAndIdentity:
    """笔记与身份公开测试"""

    def test_note_does_not_touch_game_state(self):
        metadata, state = two_player_game()
        new_state = game_reducer(state, NoteAction(1, "f"), metadata)
        assert new_state.notes[1].finessed
        assert new_state.deck == state.deck
        assert new_state.turn == state.turn
        assert new_state.stats.cards_gotten_by_notes == 1
        assert state.stats.cards_gotten_by_notes is None

    def test_card_identity(self):
        metadata = GameMetadata(options=GameOptions(num_players=2))
        state = initial_game_state(metadata)
        state = game_reducer(state, DrawAction(0, 0), metadata)
        assert state.deck[0].identity is None
        state = game_reducer(state, CardIdentityAction(0, 2, 3), metadata)
        assert state.deck[0].identity == (2, 3)

    def test_game_over_action(self):
        metadata, state = two_player_game()
        state = game_reducer(state, GameOverAction(EndCondition.TERMINATED, 0), metadata)
        assert state.is_game_over
        assert state.turn.end_condition == EndCondition.TERMINATED
        assert state.turn.segment == 1


class TestUnknownAction:
    """未知动作测试"""

    def test_raises(self):
        @dataclass(frozen=True)
        class BogusAction:
            order: int

        metadata, state = two_player_game()
        with pytest.raises(ValueError, match="Unknown action type"):
            game_reducer(state, BogusAction(0), metadata)
