"""
游戏状态定义

使用不可变数据结构 (frozen dataclass + tuple), 支持:
- 录像重放的确定性 (同一日志两次折叠得到相同快照)
- 假设推演时克隆状态而不会污染实时状态
- 观察者基于相等性的变化检测
"""
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple

from .cards import CardState
from .constants import CARDS_PER_HAND, MAX_PLAYERS, MIN_PLAYERS
from .notes import CardNote
from .variants import Variant, get_variant


class StackDirection(Enum):
    """出牌堆方向"""
    UNDECIDED = "undecided"
    UP = "up"
    DOWN = "down"
    FINISHED = "finished"


class PaceRisk(Enum):
    """弃牌风险等级"""
    ZERO = "zero"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EndCondition(IntEnum):
    """结束原因 (与服务器一致)"""
    IN_PROGRESS = 0
    NORMAL = 1
    STRIKEOUT = 2
    TIMEOUT = 3
    TERMINATED = 4
    SPEEDRUN_FAIL = 5
    IDLE_TIMEOUT = 6
    CHARACTER_SOFTLOCK = 7


@dataclass(frozen=True)
class GameOptions:
    """
    对局选项

    Attributes:
        num_players: 玩家数
        variant_name: 变体名
        cards_per_hand: 手牌数 (None 表示按人数默认)
        detrimental_characters: 是否启用角色
    """
    num_players: int = 2
    variant_name: str = "No Variant"
    cards_per_hand: Optional[int] = None
    detrimental_characters: bool = False

    def __post_init__(self):
        if not MIN_PLAYERS <= self.num_players <= MAX_PLAYERS:
            raise ValueError(f"Invalid number of players: {self.num_players}")

    @classmethod
    def from_dict(cls, d: dict) -> 'GameOptions':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)


@dataclass(frozen=True)
class GameMetadata:
    """
    对局元数据 (整局不变)

    Attributes:
        options: 对局选项
        character_assignments: 各玩家的角色 ID
        our_player_index: 观察者座位 (观战/录像为 None)
        playing: 观察者正在对局中
        shadowing: 观察者在跟随某位玩家的视角
        variant: 变体 (默认按 options.variant_name 从目录中取)
    """
    options: GameOptions = field(default_factory=GameOptions)
    character_assignments: Tuple[Optional[int], ...] = ()
    our_player_index: Optional[int] = None
    playing: bool = False
    shadowing: bool = False
    variant: Optional[Variant] = None

    def __post_init__(self):
        if self.variant is None:
            object.__setattr__(self, "variant", get_variant(self.options.variant_name))

    @property
    def num_players(self) -> int:
        return self.options.num_players

    @property
    def cards_per_hand(self) -> int:
        if self.options.cards_per_hand is not None:
            return self.options.cards_per_hand
        return CARDS_PER_HAND[self.options.num_players]


@dataclass(frozen=True)
class StateClue:
    """
    提示日志条目 (追加后不再修改)

    Attributes:
        type: 提示类型 (ClueType 的值)
        value: 颜色索引或牌面值
        giver: 提示者
        target: 被提示者
        touched: 被碰到的牌
        negative: 目标手牌中未被碰到的牌
        segment: 提示时的 segment
    """
    type: int
    value: int
    giver: int
    target: int
    touched: Tuple[int, ...]
    negative: Tuple[int, ...]
    segment: int


@dataclass(frozen=True)
class StateStrike:
    """一次失误"""
    segment: int
    order: int


@dataclass(frozen=True)
class TurnState:
    """
    回合状态

    Attributes:
        segment: 单调递增的步数, 用于录像/观战同步
        turn_num: 已结束的回合数
        current_player_index: 当前玩家 (游戏结束为 None)
        end_turn_num: 最后一轮结束时的回合数 (牌堆抽空后确定)
        play_order_inverted: 出牌顺序是否反转
        end_condition: 结束原因
    """
    segment: int = 0
    turn_num: int = 0
    current_player_index: Optional[int] = 0
    end_turn_num: Optional[int] = None
    play_order_inverted: bool = False
    end_condition: EndCondition = EndCondition.IN_PROGRESS

    @property
    def is_game_over(self) -> bool:
        return self.current_player_index is None


@dataclass(frozen=True)
class StatsState:
    """
    统计状态 (每个动作之后由牌堆/出牌堆/回合状态重新计算)

    Attributes:
        max_score: 当前可达最高分
        max_score_per_stack: 每个花色可达最高分
        pace: 还能承受的弃牌数 (游戏结束或牌堆为空为 None)
        pace_risk: 弃牌风险
        cards_gotten: 已 "拿到" 的牌数
        cards_gotten_by_notes: 按笔记调整的拿到牌数 (没有笔记为 None)
        potential_clues_lost: 已消耗或损失的提示数
        efficiency: cards_gotten / potential_clues_lost (分母为 0 时为 None)
        future_efficiency: 剩余所需效率
        clues_still_usable: 仍可使用的提示数 (向下取整)
        clues_still_usable_not_rounded: 未取整版本
        final_round_effectively_started: 最后一轮实际已开始
        double_discard: 造成 "双弃" 局面的牌
    """
    max_score: int
    max_score_per_stack: Tuple[int, ...]
    pace: Optional[int] = None
    pace_risk: PaceRisk = PaceRisk.LOW
    cards_gotten: int = 0
    cards_gotten_by_notes: Optional[int] = None
    potential_clues_lost: float = 0
    efficiency: Optional[float] = None
    future_efficiency: Optional[float] = None
    clues_still_usable: Optional[int] = None
    clues_still_usable_not_rounded: Optional[float] = None
    final_round_effectively_started: bool = False
    double_discard: Optional[int] = None

    def to_dict(self) -> Dict:
        """转换为可 JSON 序列化的字典"""
        return {
            "maxScore": self.max_score,
            "maxScorePerStack": list(self.max_score_per_stack),
            "pace": self.pace,
            "paceRisk": self.pace_risk.value,
            "cardsGotten": self.cards_gotten,
            "cardsGottenByNotes": self.cards_gotten_by_notes,
            "potentialCluesLost": self.potential_clues_lost,
            "efficiency": self.efficiency,
            "futureEfficiency": self.future_efficiency,
            "cluesStillUsable": self.clues_still_usable,
            "cluesStillUsableNotRounded": self.clues_still_usable_not_rounded,
            "finalRoundEffectivelyStarted": self.final_round_effectively_started,
            "doubleDiscard": self.double_discard,
        }


@dataclass(frozen=True)
class GameState:
    """
    不可变游戏状态 (某一时刻的完整快照)

    Attributes:
        deck: 每张牌的状态 (按 order 索引)
        hands: 各玩家手牌 (最新抽的牌在最前)
        play_stacks: 各花色出牌堆
        play_stack_directions: 各花色方向
        play_stack_starts: 各花色起始牌面值 (数独变体)
        discard_stacks: 各花色弃牌堆
        clue_tokens: 提示数 (提示匮乏变体中可能为半个)
        strikes: 失误记录
        clues: 提示日志
        cards_remaining_in_the_deck: 牌堆剩余张数
        turn: 回合状态
        stats: 统计状态
        notes: 玩家笔记 (按 order 索引)
    """
    deck: Tuple[CardState, ...]
    hands: Tuple[Tuple[int, ...], ...]
    play_stacks: Tuple[Tuple[int, ...], ...]
    play_stack_directions: Tuple[StackDirection, ...]
    play_stack_starts: Tuple[Optional[int], ...]
    discard_stacks: Tuple[Tuple[int, ...], ...]
    clue_tokens: float
    strikes: Tuple[StateStrike, ...]
    clues: Tuple[StateClue, ...]
    cards_remaining_in_the_deck: int
    turn: TurnState
    stats: StatsState
    notes: Tuple[Optional[CardNote], ...] = ()

    @property
    def score(self) -> int:
        return sum(len(stack) for stack in self.play_stacks)

    @property
    def score_per_stack(self) -> Tuple[int, ...]:
        return tuple(len(stack) for stack in self.play_stacks)

    @property
    def num_players(self) -> int:
        return len(self.hands)

    @property
    def is_game_over(self) -> bool:
        return self.turn.is_game_over
