"""
手牌 reducer - 最新抽的牌放在最前
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


def hands_reducer(state: GameState, action: GameAction, metadata: GameMetadata) -> GameState:
    if isinstance(action, DrawAction):
        hands = list(state.hands)
        hands[action.player_index] = (action.order,) + hands[action.player_index]
        return replace(state, hands=tuple(hands))

    if isinstance(action, (PlayAction, DiscardAction)):
        hands = list(state.hands)
        hand = hands[action.player_index]
        if action.order not in hand:
            raise ValueError(
                f"Card {action.order} is not in the hand of player {action.player_index}."
            )
        hands[action.player_index] = tuple(order for order in hand if order != action.order)
        return replace(state, hands=tuple(hands))

    if isinstance(action, (ClueAction, CardIdentityAction, GameOverAction, NoteAction)):
        return state

    raise ValueError(f"Unknown action type: {type(action).__name__}")
