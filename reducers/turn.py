"""
回合 reducer - segment、回合数、当前玩家、最后一轮、结束条件
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
from core.constants import MAX_STRIKES
from core.state import EndCondition, GameMetadata, GameState, TurnState
from rules import turn as turn_rules


def _end_turn(state: GameState, metadata: GameMetadata) -> TurnState:
    """出牌/弃牌/提示结束当前玩家的回合"""
    turn = state.turn
    if turn.is_game_over:
        return replace(turn, segment=turn.segment + 1, turn_num=turn.turn_num + 1)

    play_order_inverted = turn.play_order_inverted
    character = turn_rules.get_player_character(metadata, turn.current_player_index)
    if turn_rules.should_play_order_invert(character):
        play_order_inverted = not play_order_inverted

    turn_num = turn.turn_num + 1
    current_player_index = turn_rules.get_next_player_index(
        turn.current_player_index,
        metadata.num_players,
        play_order_inverted,
    )

    # 检查游戏是否结束
    end_condition = turn.end_condition
    if len(state.strikes) >= MAX_STRIKES:
        end_condition = EndCondition.STRIKEOUT
    elif state.score >= metadata.variant.max_score:
        end_condition = EndCondition.NORMAL
    elif turn.end_turn_num is not None and turn_num >= turn.end_turn_num:
        end_condition = EndCondition.NORMAL

    if end_condition != EndCondition.IN_PROGRESS:
        current_player_index = None

    return replace(
        turn,
        segment=turn.segment + 1,
        turn_num=turn_num,
        current_player_index=current_player_index,
        play_order_inverted=play_order_inverted,
        end_condition=end_condition,
    )


def turn_reducer(state: GameState, action: GameAction, metadata: GameMetadata) -> GameState:
    """
    Args:
        state: 已经过牌/手牌/出牌堆/提示数 reducer 的状态
        action: 动作
        metadata: 对局元数据

    Returns:
        新状态
    """
    if isinstance(action, (PlayAction, DiscardAction, ClueAction)):
        return replace(state, turn=_end_turn(state, metadata))

    if isinstance(action, DrawAction):
        # 最后一张牌被抽走: 再进行 end_game_length 个回合
        if state.cards_remaining_in_the_deck == 0 and state.turn.end_turn_num is None:
            end_turn_num = state.turn.turn_num + turn_rules.get_end_game_length(metadata)
            return replace(state, turn=replace(state.turn, end_turn_num=end_turn_num))
        return state

    if isinstance(action, GameOverAction):
        turn = state.turn
        end_condition = action.end_condition
        if end_condition == EndCondition.IN_PROGRESS:
            end_condition = turn.end_condition
        return replace(
            state,
            turn=replace(
                turn,
                segment=turn.segment + 1,
                current_player_index=None,
                end_condition=end_condition,
            ),
        )

    if isinstance(action, (CardIdentityAction, NoteAction)):
        return state

    raise ValueError(f"Unknown action type: {type(action).__name__}")
