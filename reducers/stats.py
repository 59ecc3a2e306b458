"""
统计 reducer

每个动作之后由牌/出牌堆/回合状态重新计算; 只有 potential_clues_lost
和 double_discard 依赖上一个状态
"""
import math
from dataclasses import replace
from typing import Optional

from core.actions import (
    CardIdentityAction,
    ClueAction,
    DiscardAction,
    DrawAction,
    GameAction,
    GameOverAction,
    NoteAction,
    PlayAction,
)
from core.state import GameMetadata, GameState, StackDirection, StatsState
from rules import clue_tokens as clue_tokens_rules
from rules import stats as stats_rules
from rules import turn as turn_rules


def _get_effective_score(state: GameState, metadata: GameMetadata) -> int:
    """
    用于 pace 的分数

    "Throw It in a Hole" 中对局者看不到失误, 失误出牌也按打出计算
    """
    score = state.score
    if metadata.variant.throw_it_in_a_hole and (metadata.playing or metadata.shadowing):
        score += sum(1 for card in state.deck if card.is_misplayed)
    return score


def _get_clues_lost(
    previous_state: GameState,
    state: GameState,
    action: GameAction,
    metadata: GameMetadata,
) -> float:
    """本次动作消耗或损失的提示数"""
    variant = metadata.variant

    if isinstance(action, ClueAction):
        return 1

    if isinstance(action, DiscardAction) and action.failed:
        # 对局者看不到 "Throw It in a Hole" 中的失误
        if variant.throw_it_in_a_hole and (metadata.playing or metadata.shadowing):
            return 0
        return clue_tokens_rules.discard_value(variant)

    if isinstance(action, PlayAction):
        stack_complete = state.play_stack_directions[action.suit_index] == StackDirection.FINISHED
        if stack_complete and clue_tokens_rules.is_at_max_clue_tokens(previous_state.clue_tokens):
            return clue_tokens_rules.suit_value(variant)

    return 0


def compute_stats(
    state: GameState,
    metadata: GameMetadata,
    deck_size: int,
    potential_clues_lost: float = 0,
    double_discard: Optional[int] = None,
) -> StatsState:
    """
    由状态推导完整的统计

    Args:
        state: 其它部分已更新的状态
        metadata: 对局元数据
        deck_size: 用于计算的牌堆张数
        potential_clues_lost: 累计消耗或损失的提示
        double_discard: 双弃牌

    Returns:
        StatsState
    """
    variant = metadata.variant
    end_game_length = turn_rules.get_end_game_length(metadata)

    max_score_per_stack = stats_rules.get_max_score_per_stack(
        state.deck,
        state.play_stack_directions,
        state.play_stack_starts,
        variant,
    )
    max_score = sum(max_score_per_stack)

    pace = stats_rules.get_pace(
        _get_effective_score(state, metadata),
        deck_size,
        max_score,
        end_game_length,
        state.is_game_over,
    )
    pace_risk = stats_rules.get_pace_risk(pace, metadata.num_players)

    cards_gotten = stats_rules.get_cards_gotten(
        state.deck,
        state.play_stacks,
        state.play_stack_directions,
        state.play_stack_starts,
        metadata.playing,
        metadata.shadowing,
        max_score,
        variant,
    )

    cards_gotten_by_notes = None
    if any(note is not None for note in state.notes):
        cards_gotten_by_notes = stats_rules.get_cards_gotten_by_notes(
            state.deck,
            state.play_stacks,
            state.play_stack_directions,
            state.play_stack_starts,
            variant,
            state.notes,
        )

    efficiency = None
    if potential_clues_lost > 0:
        efficiency = stats_rules.get_efficiency(cards_gotten, potential_clues_lost)

    clues_still_usable_not_rounded = stats_rules.get_clues_still_usable_not_rounded(
        state.score,
        state.score_per_stack,
        max_score_per_stack,
        variant.stack_size,
        deck_size,
        end_game_length,
        clue_tokens_rules.discard_value(variant),
        clue_tokens_rules.suit_value(variant),
        state.clue_tokens,
    )
    clues_still_usable = None
    if clues_still_usable_not_rounded is not None:
        clues_still_usable = math.floor(clues_still_usable_not_rounded)

    stats = StatsState(
        max_score=max_score,
        max_score_per_stack=max_score_per_stack,
        pace=pace,
        pace_risk=pace_risk,
        cards_gotten=cards_gotten,
        cards_gotten_by_notes=cards_gotten_by_notes,
        potential_clues_lost=potential_clues_lost,
        efficiency=efficiency,
        clues_still_usable=clues_still_usable,
        clues_still_usable_not_rounded=clues_still_usable_not_rounded,
        final_round_effectively_started=clues_still_usable is None or clues_still_usable < 1,
        double_discard=double_discard,
    )

    future_efficiency = stats_rules.get_future_efficiency(replace(state, stats=stats))
    return replace(stats, future_efficiency=future_efficiency)


def _get_double_discard(
    previous_state: GameState,
    state: GameState,
    action: GameAction,
    metadata: GameMetadata,
) -> Optional[int]:
    if isinstance(action, DiscardAction):
        if state.is_game_over:
            return None
        # 以弃牌者仍为当前玩家的视角判断 (出牌顺序取弃牌之后的)
        discard_turn = replace(
            previous_state.turn,
            play_order_inverted=state.turn.play_order_inverted,
        )
        discard_view = replace(state, turn=discard_turn)
        return stats_rules.get_double_discard_card(action.order, discard_view, metadata.variant)

    if isinstance(action, (PlayAction, ClueAction)):
        return None

    return previous_state.stats.double_discard


def stats_reducer(
    previous_state: GameState,
    state: GameState,
    action: GameAction,
    metadata: GameMetadata,
) -> GameState:
    """
    Args:
        previous_state: 动作之前的状态
        state: 其它 reducer 处理之后的状态
        action: 动作
        metadata: 对局元数据

    Returns:
        新状态
    """
    if not isinstance(
        action,
        (DrawAction, PlayAction, DiscardAction, ClueAction,
         CardIdentityAction, GameOverAction, NoteAction),
    ):
        raise ValueError(f"Unknown action type: {type(action).__name__}")

    potential_clues_lost = (
        previous_state.stats.potential_clues_lost
        + _get_clues_lost(previous_state, state, action, metadata)
    )
    double_discard = _get_double_discard(previous_state, state, action, metadata)

    stats = compute_stats(
        state,
        metadata,
        state.cards_remaining_in_the_deck,
        potential_clues_lost,
        double_discard,
    )
    return replace(state, stats=stats)
