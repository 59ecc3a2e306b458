"""
Core Layer - 数据模型 (不依赖规则层)

Modules:
    constants: 全局常量
    variants: 花色与变体目录
    characters: 角色目录
    cards: 牌状态
    notes: 玩家笔记
    state: 游戏状态与元数据
    actions: 动作类型与序列化
"""
from .constants import (
    MAX_CLUE_NUM,
    MAX_STRIKES,
    START_CARD_RANK,
    CARDS_PER_HAND,
)

from .variants import (
    StackAssignmentKind,
    Suit,
    Variant,
    VariantCatalog,
    build_variant,
    get_suit,
    get_variant,
    get_variant_by_id,
    list_variants,
)

from .characters import (
    Character,
    get_character,
    get_character_by_name,
)

from .cards import (
    CardState,
    SuitRank,
    initial_card_state,
)

from .notes import CardNote, parse_note

from .state import (
    StackDirection,
    PaceRisk,
    EndCondition,
    GameOptions,
    GameMetadata,
    StateClue,
    StateStrike,
    TurnState,
    StatsState,
    GameState,
)

from .actions import (
    ActionType,
    ClueType,
    Clue,
    DrawAction,
    PlayAction,
    DiscardAction,
    ClueAction,
    CardIdentityAction,
    GameOverAction,
    NoteAction,
    GameAction,
    action_from_dict,
    is_turn_ending,
)

__all__ = [
    # constants
    "MAX_CLUE_NUM",
    "MAX_STRIKES",
    "START_CARD_RANK",
    "CARDS_PER_HAND",
    # variants
    "StackAssignmentKind",
    "Suit",
    "Variant",
    "VariantCatalog",
    "build_variant",
    "get_suit",
    "get_variant",
    "get_variant_by_id",
    "list_variants",
    # characters
    "Character",
    "get_character",
    "get_character_by_name",
    # cards
    "CardState",
    "SuitRank",
    "initial_card_state",
    # notes
    "CardNote",
    "parse_note",
    # state
    "StackDirection",
    "PaceRisk",
    "EndCondition",
    "GameOptions",
    "GameMetadata",
    "StateClue",
    "StateStrike",
    "TurnState",
    "StatsState",
    "GameState",
    # actions
    "ActionType",
    "ClueType",
    "Clue",
    "DrawAction",
    "PlayAction",
    "DiscardAction",
    "ClueAction",
    "CardIdentityAction",
    "GameOverAction",
    "NoteAction",
    "GameAction",
    "action_from_dict",
    "is_turn_ending",
]
