"""
牌状态 reducer - 位置、身份、提示历史、可能身份
"""
from dataclasses import replace
from typing import List

from core.actions import (
    CardIdentityAction,
    ClueAction,
    ClueType,
    DiscardAction,
    DrawAction,
    GameAction,
    GameOverAction,
    NoteAction,
    PlayAction,
)
from core.cards import CardState
from core.constants import LOCATION_DISCARD, LOCATION_PLAY_STACK
from core.state import GameMetadata, GameState
from rules import clues as clue_rules
from rules import deck as deck_rules


def _update_possible_cards(deck: List[CardState], metadata: GameMetadata) -> None:
    """去掉所有张数都已公开 (打出或弃掉) 的身份"""
    variant = metadata.variant
    exhausted = deck_rules.get_public_counts(deck, variant) >= deck_rules.get_copy_counts(variant)

    for i, card in enumerate(deck):
        if card.is_played or card.is_discarded:
            continue
        possible_cards = tuple(
            (suit_index, rank)
            for suit_index, rank in card.possible_cards_from_clues
            if not exhausted[suit_index, variant.rank_index(rank)]
        )
        if possible_cards != card.possible_cards:
            deck[i] = replace(card, possible_cards=possible_cards)


def _apply_clue(
    deck: List[CardState],
    state: GameState,
    action: ClueAction,
    metadata: GameMetadata,
) -> None:
    segment = state.turn.segment
    for order in state.hands[action.target]:
        card = deck[order]
        positive = order in action.touched
        possible_cards_from_clues = clue_rules.apply_clue_to_possibilities(
            card.possible_cards_from_clues, action.clue, positive, metadata.variant,
        )

        if not positive:
            deck[order] = replace(card, possible_cards_from_clues=possible_cards_from_clues)
            continue

        positive_color_clues = card.positive_color_clues
        positive_rank_clues = card.positive_rank_clues
        if action.clue.type == ClueType.COLOR:
            if action.clue.value not in positive_color_clues:
                positive_color_clues = positive_color_clues + (action.clue.value,)
        elif action.clue.value not in positive_rank_clues:
            positive_rank_clues = positive_rank_clues + (action.clue.value,)

        deck[order] = replace(
            card,
            possible_cards_from_clues=possible_cards_from_clues,
            positive_color_clues=positive_color_clues,
            positive_rank_clues=positive_rank_clues,
            num_positive_clues=card.num_positive_clues + 1,
            segment_first_clued=(
                segment if card.segment_first_clued is None else card.segment_first_clued
            ),
        )


def cards_reducer(state: GameState, action: GameAction, metadata: GameMetadata) -> GameState:
    """
    更新 deck 与 cards_remaining_in_the_deck

    Args:
        state: 上一个状态
        action: 动作
        metadata: 对局元数据

    Returns:
        新状态
    """
    deck = list(state.deck)
    cards_remaining = state.cards_remaining_in_the_deck
    segment = state.turn.segment

    if isinstance(action, DrawAction):
        card = deck[action.order]
        deck[action.order] = replace(
            card,
            location=action.player_index,
            suit_index=action.suit_index,
            rank=action.rank,
            segment_drawn=segment,
            # 第一个回合结束之前抽到的都是起手牌
            dealt_to_starting_hand=state.turn.turn_num == 0,
        )
        cards_remaining -= 1

    elif isinstance(action, PlayAction):
        card = deck[action.order].revealed(action.suit_index, action.rank)
        deck[action.order] = replace(
            card,
            location=LOCATION_PLAY_STACK,
            segment_played=segment,
        )

    elif isinstance(action, DiscardAction):
        card = deck[action.order].revealed(action.suit_index, action.rank)
        deck[action.order] = replace(
            card,
            location=LOCATION_DISCARD,
            segment_discarded=segment,
            is_misplayed=action.failed,
        )

    elif isinstance(action, ClueAction):
        if not clue_rules.is_valid_clue(action.clue, metadata.variant):
            raise ValueError(f"Invalid clue {action.clue} in variant: {metadata.variant.name}")
        _apply_clue(deck, state, action, metadata)

    elif isinstance(action, CardIdentityAction):
        card = deck[action.order]
        deck[action.order] = replace(
            card,
            suit_index=card.suit_index if action.suit_index is None else action.suit_index,
            rank=card.rank if action.rank is None else action.rank,
        )

    elif isinstance(action, (GameOverAction, NoteAction)):
        return state

    else:
        raise ValueError(f"Unknown action type: {type(action).__name__}")

    _update_possible_cards(deck, metadata)

    return replace(
        state,
        deck=tuple(deck),
        cards_remaining_in_the_deck=cards_remaining,
    )
