"""
变体目录

花色 (Suit) 与变体 (Variant) 均为不可变对象:
- 进程内只从 core/data/*.json 加载一次
- 之后以引用方式在各规则函数间共享, 从不修改
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Iterable
import json

from .constants import DEFAULT_CARD_RANKS, DEFAULT_CLUE_RANKS, START_CARD_RANK


DATA_DIR = Path(__file__).parent / "data"


class StackAssignmentKind(Enum):
    """每个变体使用的最大分数 (堆分配) 算法"""
    DEFAULT = "default"        # 每个花色从 1 向上
    REVERSIBLE = "reversible"  # 含倒序花色或 "Up or Down"
    SUDOKU = "sudoku"          # 各花色起始点需要全局分配


@dataclass(frozen=True)
class Suit:
    """
    花色定义

    Attributes:
        name: 花色名
        abbreviation: 缩写
        clue_colors: 能碰到该花色的颜色提示
        all_clue_colors: 被所有颜色提示碰到 (彩虹)
        no_clue_colors: 不被任何颜色提示碰到 (白色)
        all_clue_ranks: 被所有数字提示碰到 (粉色)
        no_clue_ranks: 不被任何数字提示碰到 (棕色)
        one_of_each: 每种牌只有一张 (黑色)
        reversed: 从 5 向下打
    """
    name: str
    abbreviation: str
    clue_colors: Tuple[str, ...] = ()
    all_clue_colors: bool = False
    no_clue_colors: bool = False
    all_clue_ranks: bool = False
    no_clue_ranks: bool = False
    one_of_each: bool = False
    reversed: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> 'Suit':
        return cls(
            name=d["name"],
            abbreviation=d["abbreviation"],
            clue_colors=tuple(d.get("clueColors", ())),
            all_clue_colors=d.get("allClueColors", False),
            no_clue_colors=d.get("noClueColors", False),
            all_clue_ranks=d.get("allClueRanks", False),
            no_clue_ranks=d.get("noClueRanks", False),
            one_of_each=d.get("oneOfEach", False),
            reversed=d.get("reversed", False),
        )


@dataclass(frozen=True)
class Variant:
    """
    不可变的变体描述

    Attributes:
        id: 变体 ID
        name: 变体名
        suits: 有序花色列表
        ranks: 出现在牌组中的牌面值
        clue_colors: 可给出的颜色提示 (按索引)
        clue_ranks: 可给出的数字提示
        stack_size: 每个出牌堆的长度
        up_or_down: 每个花色可以向上或向下打
        sudoku: 各花色起始牌面值不同
        throw_it_in_a_hole: 出牌对玩家隐藏, 失误不公开
        clue_starved: 弃牌/完成花色只得半个提示
        critical_rank: 该牌面值每个花色只有一张
    """
    id: int
    name: str
    suits: Tuple[Suit, ...]
    ranks: Tuple[int, ...]
    clue_colors: Tuple[str, ...]
    clue_ranks: Tuple[int, ...]
    stack_size: int
    up_or_down: bool = False
    sudoku: bool = False
    throw_it_in_a_hole: bool = False
    clue_starved: bool = False
    critical_rank: Optional[int] = None

    @property
    def num_suits(self) -> int:
        return len(self.suits)

    @property
    def max_score(self) -> int:
        return len(self.suits) * self.stack_size

    @property
    def has_reversed_suits(self) -> bool:
        return self.up_or_down or any(suit.reversed for suit in self.suits)

    @property
    def stack_assignment_kind(self) -> StackAssignmentKind:
        if self.sudoku:
            return StackAssignmentKind.SUDOKU
        if self.has_reversed_suits:
            return StackAssignmentKind.REVERSIBLE
        return StackAssignmentKind.DEFAULT

    def rank_index(self, rank: int) -> int:
        """牌面值在 ranks 中的列索引 (用于 花色×牌面值 矩阵)"""
        return self.ranks.index(rank)

    def all_identities(self) -> Tuple[Tuple[int, int], ...]:
        """所有 (花色索引, 牌面值) 组合"""
        return tuple(
            (suit_index, rank)
            for suit_index in range(len(self.suits))
            for rank in self.ranks
        )


def build_variant(
    variant_id: int,
    name: str,
    suits: Iterable[Suit],
    up_or_down: bool = False,
    sudoku: bool = False,
    throw_it_in_a_hole: bool = False,
    clue_starved: bool = False,
    critical_rank: Optional[int] = None,
) -> Variant:
    """
    由花色列表构建变体, 推导牌面值、提示颜色和堆大小

    Args:
        variant_id: 变体 ID
        name: 变体名
        suits: 花色

    Returns:
        Variant
    """
    suits = tuple(suits)

    if sudoku:
        # 数独变体: 牌面值个数与花色数相同
        ranks = tuple(range(1, len(suits) + 1))
        stack_size = len(suits)
    elif up_or_down:
        ranks = DEFAULT_CARD_RANKS + (START_CARD_RANK,)
        stack_size = len(DEFAULT_CARD_RANKS)
    else:
        ranks = DEFAULT_CARD_RANKS
        stack_size = len(DEFAULT_CARD_RANKS)

    clue_colors: List[str] = []
    for suit in suits:
        if suit.all_clue_colors or suit.no_clue_colors:
            continue
        for color in suit.clue_colors:
            if color not in clue_colors:
                clue_colors.append(color)

    clue_ranks = tuple(rank for rank in DEFAULT_CLUE_RANKS if rank <= stack_size)

    return Variant(
        id=variant_id,
        name=name,
        suits=suits,
        ranks=ranks,
        clue_colors=tuple(clue_colors),
        clue_ranks=clue_ranks,
        stack_size=stack_size,
        up_or_down=up_or_down,
        sudoku=sudoku,
        throw_it_in_a_hole=throw_it_in_a_hole,
        clue_starved=clue_starved,
        critical_rank=critical_rank,
    )


class VariantCatalog:
    """
    变体目录

    单例模式, 首次访问时加载, 之后只读
    """

    _instance: Optional['VariantCatalog'] = None

    def __init__(self, data_dir: Path = DATA_DIR):
        self._suits: Dict[str, Suit] = {}
        self._variants: Dict[str, Variant] = {}
        self._variants_by_id: Dict[int, Variant] = {}
        self._load(data_dir)

    @classmethod
    def get_instance(cls) -> 'VariantCatalog':
        """获取单例实例"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def _load(self, data_dir: Path):
        with open(data_dir / "suits.json", encoding="utf-8") as f:
            for entry in json.load(f):
                suit = Suit.from_dict(entry)
                self._suits[suit.name] = suit

        with open(data_dir / "variants.json", encoding="utf-8") as f:
            for entry in json.load(f):
                variant = build_variant(
                    variant_id=entry["id"],
                    name=entry["name"],
                    suits=[self.get_suit(name) for name in entry["suits"]],
                    up_or_down=entry.get("upOrDown", False),
                    sudoku=entry.get("sudoku", False),
                    throw_it_in_a_hole=entry.get("throwItInAHole", False),
                    clue_starved=entry.get("clueStarved", False),
                    critical_rank=entry.get("criticalRank"),
                )
                if variant.id in self._variants_by_id:
                    raise ValueError(f"Duplicate variant ID: {variant.id}")
                self._variants[variant.name] = variant
                self._variants_by_id[variant.id] = variant

    def get_suit(self, name: str) -> Suit:
        if name not in self._suits:
            raise ValueError(f"Unknown suit: {name}")
        return self._suits[name]

    def get_variant(self, name: str) -> Variant:
        if name not in self._variants:
            raise ValueError(f"Unknown variant: {name}")
        return self._variants[name]

    def get_variant_by_id(self, variant_id: int) -> Variant:
        if variant_id not in self._variants_by_id:
            raise ValueError(f"Unknown variant ID: {variant_id}")
        return self._variants_by_id[variant_id]

    def list_variants(self) -> List[str]:
        """列出所有变体名"""
        return list(self._variants.keys())


def get_variant(name: str) -> Variant:
    """便捷函数: 按名称获取变体"""
    return VariantCatalog.get_instance().get_variant(name)


def get_variant_by_id(variant_id: int) -> Variant:
    return VariantCatalog.get_instance().get_variant_by_id(variant_id)


def get_suit(name: str) -> Suit:
    return VariantCatalog.get_instance().get_suit(name)


def list_variants() -> List[str]:
    return VariantCatalog.get_instance().list_variants()
