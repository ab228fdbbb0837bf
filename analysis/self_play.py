"""AI-vs-AI Quarto matches between difficulty profiles."""

from __future__ import annotations

import logging
import multiprocessing as mp
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from ai.base_ai import BaseAI
from ai.factory import build_ai
from ai.profiles import AIProfile
from engine.pieces import Attribute
from engine.turns import Actor, TurnStateMachine

LOGGER = logging.getLogger(__name__)

SEAT_A = "a"
SEAT_B = "b"

# A profile name or an already resolved profile (config overrides applied).
ProfileRef = Union[AIProfile, str]


@dataclass
class EpisodeStats:
    """Summary from one match. ``winner`` is ``a``, ``b`` or None for a draw."""

    winner: Optional[str]
    is_draw: bool
    placements: int
    a_opened: bool
    attribute: Optional[Attribute] = None
    line_label: Optional[str] = None


@dataclass
class SelfPlayConfig:
    """Self-play generation config."""

    parallel_workers: int = 1
    base_seed: Optional[int] = None
    log_every: int = 10
    alternate_opener: bool = True


def _seed_for(base_seed: Optional[int], game_index: int, offset: int = 0) -> Optional[int]:
    return None if base_seed is None else base_seed + game_index * 2 + offset


def _simulate_single_game(agent_a: BaseAI, agent_b: BaseAI, a_opens: bool) -> EpisodeStats:
    """Play one game; the opener takes the human seat and hands over the first piece."""
    agent_a.new_game()
    agent_b.new_game()
    opener, responder = (agent_a, agent_b) if a_opens else (agent_b, agent_a)
    seats: Dict[Actor, BaseAI] = {Actor.HUMAN: opener, Actor.AI: responder}
    machine = TurnStateMachine()
    placements = 0

    while not machine.game_over:
        actor = machine.actor
        agent = seats[actor]
        if machine.phase.is_selection:
            piece_id = agent.select_piece(machine.board)
            if not machine.select_piece(actor, piece_id):
                raise RuntimeError(f"{agent.name} selected unavailable piece {piece_id}")
        else:
            index = agent.place_piece(machine.board, machine.selected)
            if machine.place_selected(actor, index) is None:
                raise RuntimeError(f"{agent.name} chose illegal cell {index}")
            placements += 1

    outcome = machine.outcome
    winner: Optional[str] = None
    if not outcome.is_draw:
        winner_is_opener = outcome.winner is Actor.HUMAN
        winner = SEAT_A if winner_is_opener == a_opens else SEAT_B
    return EpisodeStats(
        winner=winner,
        is_draw=outcome.is_draw,
        placements=placements,
        a_opened=a_opens,
        attribute=outcome.attribute,
        line_label=outcome.line_label,
    )


def _parallel_worker(
    game_index: int,
    profile_a: ProfileRef,
    profile_b: ProfileRef,
    base_seed: Optional[int],
    alternate_opener: bool,
) -> EpisodeStats:
    agent_a = build_ai(profile_a, seed=_seed_for(base_seed, game_index))
    agent_b = build_ai(profile_b, seed=_seed_for(base_seed, game_index, offset=1))
    a_opens = not alternate_opener or game_index % 2 == 0
    return _simulate_single_game(agent_a, agent_b, a_opens=a_opens)


class SelfPlayRunner:
    """Runs profile-vs-profile matches and returns per-game stats."""

    def __init__(self, config: SelfPlayConfig | None = None) -> None:
        self.config = config or SelfPlayConfig()

    def run_games(self, agent_a: BaseAI, agent_b: BaseAI, n_games: int) -> List[EpisodeStats]:
        results: List[EpisodeStats] = []
        for game_index in range(n_games):
            a_opens = not self.config.alternate_opener or game_index % 2 == 0
            stats = _simulate_single_game(agent_a, agent_b, a_opens=a_opens)
            results.append(stats)
            self._log_progress(game_index, n_games, stats)
        return results

    def run_games_from_profiles(self, profile_a: ProfileRef, profile_b: ProfileRef, n_games: int) -> List[EpisodeStats]:
        if self.config.parallel_workers <= 1:
            agent_a = build_ai(profile_a, seed=_seed_for(self.config.base_seed, 0))
            agent_b = build_ai(profile_b, seed=_seed_for(self.config.base_seed, 0, offset=1))
            return self.run_games(agent_a, agent_b, n_games=n_games)

        args = [
            (idx, profile_a, profile_b, self.config.base_seed, self.config.alternate_opener)
            for idx in range(n_games)
        ]
        with mp.Pool(processes=self.config.parallel_workers) as pool:
            results = pool.starmap(_parallel_worker, args)
        for idx, stats in enumerate(results):
            self._log_progress(idx, n_games, stats)
        return results

    def _log_progress(self, game_index: int, n_games: int, stats: EpisodeStats) -> None:
        if (game_index + 1) % max(1, self.config.log_every) == 0:
            LOGGER.info(
                "Self-play game %d/%d | winner=%s draw=%s placements=%d",
                game_index + 1,
                n_games,
                stats.winner,
                stats.is_draw,
                stats.placements,
            )

    @staticmethod
    def summarize(results: Sequence[EpisodeStats]) -> Dict[str, float]:
        """Aggregate win/draw counts, rates and game length."""
        summary: Dict[str, float] = {
            "games": len(results),
            "a_wins": 0,
            "b_wins": 0,
            "draws": 0,
            "a_win_rate": 0.0,
            "b_win_rate": 0.0,
            "draw_rate": 0.0,
            "opener_win_rate": 0.0,
            "mean_placements": 0.0,
            "std_placements": 0.0,
        }
        if not results:
            return summary

        winners = np.array([stats.winner or "" for stats in results])
        draws = np.array([stats.is_draw for stats in results], dtype=np.bool_)
        placements = np.array([stats.placements for stats in results], dtype=np.float64)
        opener_won = np.array(
            [
                stats.winner is not None and (stats.winner == SEAT_A) == stats.a_opened
                for stats in results
            ],
            dtype=np.bool_,
        )

        summary["a_wins"] = int(np.count_nonzero(winners == SEAT_A))
        summary["b_wins"] = int(np.count_nonzero(winners == SEAT_B))
        summary["draws"] = int(np.count_nonzero(draws))
        summary["a_win_rate"] = summary["a_wins"] / len(results)
        summary["b_win_rate"] = summary["b_wins"] / len(results)
        summary["draw_rate"] = summary["draws"] / len(results)
        summary["opener_win_rate"] = float(opener_won.mean())
        summary["mean_placements"] = float(placements.mean())
        summary["std_placements"] = float(placements.std())
        for attribute in Attribute:
            summary[f"wins_by_{attribute.value}"] = sum(1 for stats in results if stats.attribute is attribute)
        return summary


def run_self_play(
    profile_a: ProfileRef,
    profile_b: ProfileRef,
    games: int,
    base_seed: Optional[int] = None,
    parallel_workers: int = 1,
) -> Dict[str, float]:
    """Run ``games`` matches between two profiles and return the summary."""
    runner = SelfPlayRunner(SelfPlayConfig(base_seed=base_seed, parallel_workers=parallel_workers))
    results = runner.run_games_from_profiles(profile_a, profile_b, n_games=games)
    return runner.summarize(results)
