"""
笔记 reducer - 只记录玩家笔记, 不影响真实的游戏状态
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
from core.notes import parse_note
from core.state import GameMetadata, GameState


def notes_reducer(state: GameState, action: GameAction, metadata: GameMetadata) -> GameState:
    if isinstance(action, NoteAction):
        notes = list(state.notes)
        if len(notes) < len(state.deck):
            notes.extend([None] * (len(state.deck) - len(notes)))
        # 空笔记等同于删除
        notes[action.order] = parse_note(action.text) if action.text.strip() else None
        return replace(state, notes=tuple(notes))

    if isinstance(
        action,
        (DrawAction, PlayAction, DiscardAction, ClueAction, CardIdentityAction, GameOverAction),
    ):
        return state

    raise ValueError(f"Unknown action type: {type(action).__name__}")
