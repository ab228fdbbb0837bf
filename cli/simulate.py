"""CLI command for AI-vs-AI matches and AI calibration reports."""

from __future__ import annotations

import argparse
import logging

from ai.profiles import MOODS, LOCKED_MOOD, profile_names
from analysis.calibration import measure_placement_rates
from analysis.self_play import run_self_play
from game.config import GameConfig

MOOD_CHOICES = {mood.name: mood for mood in (LOCKED_MOOD, *MOODS)}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pit Quarto AI profiles against each other or calibrate one.")
    parser.add_argument("--config", type=str, default=None, help="Path to game config JSON")
    parser.add_argument("--log-level", type=str, default="INFO", help="Python logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", help="Play profile A against profile B")
    match.add_argument("--a", choices=profile_names(), default="normal", help="Profile for seat A")
    match.add_argument("--b", choices=profile_names(), default="hardcore", help="Profile for seat B")
    match.add_argument("--games", type=int, default=100, help="Number of games")
    match.add_argument("--seed", type=int, default=None, help="Base seed")
    match.add_argument("--workers", type=int, default=1, help="Parallel worker processes")

    calibrate = sub.add_parser("calibrate", help="Measure a profile's win-take, defense and mistake rates")
    calibrate.add_argument("--profile", choices=profile_names(), default="normal", help="Profile to measure")
    calibrate.add_argument("--mood", choices=sorted(MOOD_CHOICES), default=LOCKED_MOOD.name, help="Pinned mood")
    calibrate.add_argument("--trials", type=int, default=500, help="Number of placements")
    calibrate.add_argument("--seed", type=int, default=None, help="Seed")
    calibrate.add_argument("--tolerance", type=float, default=0.05, help="Allowed deviation per rate")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    config = GameConfig.from_json(args.config) if args.config else GameConfig()

    if args.command == "match":
        profile_a, profile_b = config.resolve_profile(args.a), config.resolve_profile(args.b)
        summary = run_self_play(profile_a, profile_b, games=args.games, base_seed=args.seed, parallel_workers=args.workers)
        print(f"{args.a} (A) vs {args.b} (B) over {summary['games']} games")
        for key, value in summary.items():
            print(f"  {key:<18} {value:.3f}" if isinstance(value, float) else f"  {key:<18} {value}")
        return

    profile = config.resolve_profile(args.profile)
    if profile.deterministic:
        print(f"Profile {profile.name} is deterministic; nothing to calibrate.")
        return
    report = measure_placement_rates(profile, trials=args.trials, seed=args.seed, mood=MOOD_CHOICES[args.mood])
    print(f"Calibration for {report.profile} (mood={report.mood}, trials={report.trials})")
    print(f"  win-take  {report.observed_win_take:.3f} vs {report.expected_win_take:.3f} ({report.win_opportunities} chances)")
    print(f"  defense   {report.observed_defense:.3f} vs {report.expected_defense:.3f} ({report.scored_placements} placements)")
    print(f"  mistake   {report.observed_mistake:.3f} vs {report.expected_mistake:.3f}")
    print("  within tolerance" if report.within(args.tolerance) else "  OUT OF TOLERANCE")


if __name__ == "__main__":
    main()
