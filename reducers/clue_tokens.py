"""
提示数 reducer - 提示数、失误记录、提示日志
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
from core.state import GameMetadata, GameState, StackDirection, StateClue, StateStrike
from rules import clue_tokens as clue_tokens_rules


def clue_tokens_reducer(state: GameState, action: GameAction, metadata: GameMetadata) -> GameState:
    """
    Args:
        state: 已经过出牌堆 reducer 的状态
        action: 动作
        metadata: 对局元数据

    Returns:
        新状态

    Raises:
        ValueError: 没有提示时给出提示
    """
    variant = metadata.variant
    segment = state.turn.segment

    if isinstance(action, ClueAction):
        clue_tokens = clue_tokens_rules.spend(state.clue_tokens)
        negative = tuple(
            order for order in state.hands[action.target] if order not in action.touched
        )
        clue = StateClue(
            type=int(action.clue.type),
            value=action.clue.value,
            giver=action.giver,
            target=action.target,
            touched=tuple(action.touched),
            negative=negative,
            segment=segment,
        )
        return replace(state, clue_tokens=clue_tokens, clues=state.clues + (clue,))

    if isinstance(action, PlayAction):
        stack_complete = state.play_stack_directions[action.suit_index] == StackDirection.FINISHED
        clue_tokens = clue_tokens_rules.get_clue_tokens_after_play(
            state.clue_tokens, stack_complete, variant,
        )
        return replace(state, clue_tokens=clue_tokens)

    if isinstance(action, DiscardAction):
        clue_tokens = clue_tokens_rules.get_clue_tokens_after_discard(
            state.clue_tokens, action.failed, variant,
        )
        strikes = state.strikes
        if action.failed:
            strikes = strikes + (StateStrike(segment=segment, order=action.order),)
        return replace(state, clue_tokens=clue_tokens, strikes=strikes)

    if isinstance(action, (DrawAction, CardIdentityAction, GameOverAction, NoteAction)):
        return state

    raise ValueError(f"Unknown action type: {type(action).__name__}")
