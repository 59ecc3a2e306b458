"""
出牌堆 reducer - 出牌堆、方向、起点、弃牌堆
"""
from dataclasses import replace

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
from core.state import GameMetadata, GameState
from rules import play_stacks as play_stacks_rules


def play_stacks_reducer(state: GameState, action: GameAction, metadata: GameMetadata) -> GameState:
    """
    出牌后更新出牌堆与方向; 弃牌后更新弃牌堆

    身份未知的弃牌 (例如对玩家隐藏的失误出牌) 不进入任何花色的弃牌堆
    """
    variant = metadata.variant

    if isinstance(action, PlayAction):
        play_stacks = list(state.play_stacks)
        play_stacks[action.suit_index] = play_stacks[action.suit_index] + (action.order,)

        # 方向和起点都由出牌堆推导
        play_stack_directions = tuple(
            play_stacks_rules.get_direction(suit_index, stack, state.deck, variant)
            for suit_index, stack in enumerate(play_stacks)
        )
        play_stack_starts = tuple(
            play_stacks_rules.get_stack_start(stack, state.deck, variant)
            for stack in play_stacks
        )
        return replace(
            state,
            play_stacks=tuple(play_stacks),
            play_stack_directions=play_stack_directions,
            play_stack_starts=play_stack_starts,
        )

    if isinstance(action, DiscardAction):
        if action.suit_index is None:
            return state
        discard_stacks = list(state.discard_stacks)
        discard_stacks[action.suit_index] = discard_stacks[action.suit_index] + (action.order,)
        return replace(state, discard_stacks=tuple(discard_stacks))

    if isinstance(action, (DrawAction, ClueAction, CardIdentityAction, GameOverAction, NoteAction)):
        return state

    raise ValueError(f"Unknown action type: {type(action).__name__}")
