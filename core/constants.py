"""
全局常量

与 hanab.live 服务器保持一致
"""
from typing import Tuple

# 最大提示数 (同时也是开局提示数)
MAX_CLUE_NUM = 8

# 三次失误游戏结束
MAX_STRIKES = 3

# 标准牌面值与可提示的数字
DEFAULT_CARD_RANKS: Tuple[int, ...] = (1, 2, 3, 4, 5)
DEFAULT_CLUE_RANKS: Tuple[int, ...] = (1, 2, 3, 4, 5)

# "Up or Down" 变体的起始牌 (START) 使用的特殊牌面值
START_CARD_RANK = 7

# 牌的位置 (除玩家手牌外, 手牌用玩家索引表示)
LOCATION_DECK = "deck"
LOCATION_PLAY_STACK = "playStack"
LOCATION_DISCARD = "discard"

# 各人数对应的手牌数
CARDS_PER_HAND = {
    2: 5,
    3: 5,
    4: 4,
    5: 4,
    6: 3,
}

MIN_PLAYERS = 2
MAX_PLAYERS = 6
