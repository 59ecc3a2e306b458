#!/usr/bin/env python3
"""
录像重放脚本

Usage:
    python scripts/replay_game.py --game game.json
    python scripts/replay_game.py --game game.json --segment 20 --output stats.json
    python scripts/replay_game.py --game game.json --playing --verbose
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional
import json

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from replay import (
    ReplayConfig,
    fold,
    load_json_game,
    state_at_segment,
    with_viewer,
)
from rules import stats as stats_rules
from rules import turn as turn_rules

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Hanabi Replay")

    parser.add_argument("--game", type=str, required=True, help="hanab.live JSON game file")
    parser.add_argument("--segment", type=int, default=None, help="Stop at this segment")
    parser.add_argument("--playing", action="store_true", help="Compute stats as a player")
    parser.add_argument("--shadowing", action="store_true", help="Compute stats as a shadower")
    parser.add_argument("--output", type=str, help="Output file for the final stats")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args()


def run(config: ReplayConfig, game_path: str, output: Optional[str] = None) -> dict:
    """
    重放对局并返回统计

    Args:
        config: 重放配置
        game_path: JSON 对局文件
        output: 输出文件 (可选)

    Returns:
        统计字典
    """
    metadata, actions = load_json_game(game_path)
    metadata = with_viewer(metadata, config.playing, config.shadowing)
    logger.info(
        f"Loaded {len(actions)} actions | {metadata.variant.name} | "
        f"{metadata.num_players} players"
    )

    if config.stop_at_segment is None:
        state = fold(actions, metadata)
    else:
        state = state_at_segment(actions, metadata, config.stop_at_segment)

    stats = state.stats
    min_efficiency = stats_rules.get_min_efficiency(
        metadata.num_players,
        turn_rules.get_end_game_length(metadata),
        metadata.variant,
        metadata.cards_per_hand,
    )

    logger.info("=" * 50)
    logger.info("Replay Results")
    logger.info("=" * 50)
    logger.info(f"Segment: {state.turn.segment}")
    logger.info(f"Score: {state.score} / {stats.max_score}")
    logger.info(f"Strikes: {len(state.strikes)}")
    logger.info(f"Clue Tokens: {state.clue_tokens:g}")
    logger.info(f"Pace: {stats.pace} ({stats.pace_risk.value})")
    if stats.efficiency is not None:
        logger.info(f"Efficiency: {stats.efficiency:.2f} (min {min_efficiency:.2f})")
    if stats.future_efficiency is not None:
        logger.info(f"Future Efficiency: {stats.future_efficiency:.2f}")
    logger.info(f"End Condition: {state.turn.end_condition.name}")
    logger.info("=" * 50)

    result = {
        "segment": state.turn.segment,
        "score": state.score,
        "strikes": len(state.strikes),
        "clueTokens": state.clue_tokens,
        "endCondition": int(state.turn.end_condition),
        "minEfficiency": min_efficiency,
        "stats": stats.to_dict(),
    }

    if output:
        with open(output, "w") as f:
            json.dump(result, f, indent=2)
        logger.info(f"Results saved to {output}")

    return result


def main():
    args = parse_args()
    config = ReplayConfig(
        stop_at_segment=args.segment,
        playing=args.playing,
        shadowing=args.shadowing,
        log_level="DEBUG" if args.verbose else "INFO",
    )

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        run(config, args.game, args.output)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to replay {args.game}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
