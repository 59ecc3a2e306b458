"""
初始状态 - 所有牌都在牌堆中, 尚未发牌
"""
from dataclasses import replace

from core.cards import initial_card_state
from core.constants import MAX_CLUE_NUM
from core.state import GameMetadata, GameState, StatsState, TurnState
from rules import deck as deck_rules
from rules import play_stacks as play_stacks_rules
from rules import stats as stats_rules

from .stats import compute_stats


def initial_game_state(metadata: GameMetadata) -> GameState:
    """
    创建对局的初始状态

    起手牌通过随后的抽牌动作发出; 初始统计按发完起手牌后的牌堆计算

    Args:
        metadata: 对局元数据

    Returns:
        GameState
    """
    variant = metadata.variant
    num_suits = len(variant.suits)
    total_cards = deck_rules.get_total_cards_in_deck(variant)

    deck = tuple(initial_card_state(order, variant) for order in range(total_cards))
    play_stacks = tuple(() for _ in range(num_suits))
    play_stack_directions = tuple(
        play_stacks_rules.get_direction(suit_index, stack, deck, variant)
        for suit_index, stack in enumerate(play_stacks)
    )

    state = GameState(
        deck=deck,
        hands=tuple(() for _ in range(metadata.num_players)),
        play_stacks=play_stacks,
        play_stack_directions=play_stack_directions,
        play_stack_starts=(None,) * num_suits,
        discard_stacks=tuple(() for _ in range(num_suits)),
        clue_tokens=MAX_CLUE_NUM,
        strikes=(),
        clues=(),
        cards_remaining_in_the_deck=total_cards,
        turn=TurnState(),
        stats=StatsState(
            max_score=variant.max_score,
            max_score_per_stack=(variant.stack_size,) * num_suits,
        ),
        notes=(None,) * total_cards,
    )

    starting_deck_size = stats_rules.get_starting_deck_size(
        metadata.num_players, metadata.cards_per_hand, variant,
    )
    return replace(state, stats=compute_stats(state, metadata, starting_deck_size))
