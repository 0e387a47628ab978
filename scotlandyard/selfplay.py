#!/usr/bin/env python3
"""
Run selfplay games with purely random players (uniform random move selection).

The game setup is read from a YAML file::

    rounds: [false, false, true, false, false]
    graph:
      edges:
        - {from: 1, to: 2, transport: taxi}
    players:
      - {colour: black, location: 1,
         tickets: {taxi: 4, bus: 3, underground: 3, double: 2, secret: 5}}
      - {colour: blue, location: 5,
         tickets: {taxi: 10, bus: 8, underground: 4, double: 0, secret: 0}}

Mr X must be the first player listed. One JSON summary per game is written
to stdout (or ``--output``).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import AbstractSet, Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .ai.random_ai import RandomAI
from .errors import ConfigurationError
from .game_engine import ScotlandYardGame
from .graph import TransportGraph
from .logging_config import configure_third_party_loggers, setup_logging
from .models import AIConfig, Colour, Move, PlayerConfiguration
from .spectators import Spectator

logger = logging.getLogger(__name__)


class GameSetup(BaseModel):
    """Rounds, graph and players for one game, as read from YAML."""
    rounds: List[bool]
    graph: Dict[str, Any]
    players: List[PlayerConfiguration] = Field(min_length=2)

    def build_graph(self) -> TransportGraph:
        return TransportGraph.from_mapping(self.graph)


def load_game_setup(path: str | Path) -> GameSetup:
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    try:
        return GameSetup.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigurationError(
            "Invalid game setup", context={"path": str(path), "errors": exc.error_count()}
        ) from exc


class MoveRecorder(Spectator):
    """Spectator that keeps the public record of a game."""

    def __init__(self) -> None:
        self.moves: List[Dict[str, Any]] = []
        self.rounds_started = 0
        self.rotations = 0
        self.winners: Optional[AbstractSet[Colour]] = None

    def on_move_made(self, view: ScotlandYardGame, move: Move) -> None:
        self.moves.append(move.model_dump(mode="json"))

    def on_round_started(self, view: ScotlandYardGame, round_number: int) -> None:
        self.rounds_started += 1

    def on_rotation_complete(self, view: ScotlandYardGame) -> None:
        self.rotations += 1

    def on_game_over(self, view: ScotlandYardGame, winning_players: AbstractSet[Colour]) -> None:
        self.winners = winning_players


def play_random_game(
    setup: GameSetup,
    seed: int | None = None,
    game_index: int = 0,
    max_rotations: int = 1000,
) -> dict:
    """Play one game with a RandomAI behind every colour."""
    graph = setup.build_graph()
    configurations = []
    for offset, configuration in enumerate(setup.players):
        player_seed = None if seed is None else seed * 31 + offset
        ai = RandomAI(configuration.colour, AIConfig(rng_seed=player_seed))
        configurations.append(configuration.model_copy(update={"player": ai}))

    game = ScotlandYardGame(setup.rounds, graph, *configurations)
    recorder = MoveRecorder()
    game.register_spectator(recorder)

    game_start_time = time.time()
    rotations = 0
    while not game.is_game_over() and rotations < max_rotations:
        game.start_rotate()
        rotations += 1

    winners = sorted(c.value for c in game.get_winning_players())
    return {
        'game_id': f"random_{len(setup.players)}p_{game_index}_{int(time.time())}",
        'num_players': len(setup.players),
        'winners': winners,
        'completed': game.is_game_over(),
        'rounds_played': game.get_current_round(),
        'rotations': recorder.rotations,
        'move_count': len(recorder.moves),
        'moves': recorder.moves,
        'game_time_seconds': time.time() - game_start_time,
        'timestamp': datetime.now().isoformat(),
        'seed': seed,
    }


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run random Scotland Yard selfplay games')
    parser.add_argument('setup', type=Path, help='YAML game setup file')
    parser.add_argument('--num-games', type=int, default=1, help='Number of games to play')
    parser.add_argument('--seed', type=int, default=None, help='Base RNG seed')
    parser.add_argument('--output', type=Path, default=None, help='JSONL output file')
    parser.add_argument('--max-rotations', type=int, default=1000, help='Safety cap per game')
    parser.add_argument('--log-level', default=None, help='Logging level')
    return parser


def main(argv: list[str] | None = None) -> int:
    args = create_argument_parser().parse_args(argv)
    setup_logging("scotlandyard", level=args.log_level)
    configure_third_party_loggers(quiet=True)

    setup = load_game_setup(args.setup)
    out = open(args.output, 'a', encoding='utf-8') if args.output else sys.stdout
    try:
        for index in range(args.num_games):
            seed = None if args.seed is None else args.seed + index
            result = play_random_game(
                setup, seed=seed, game_index=index, max_rotations=args.max_rotations
            )
            out.write(json.dumps(result) + "\n")
            logger.info(
                "Game %d finished after %d rounds, winners: %s",
                index,
                result['rounds_played'],
                ", ".join(result['winners']) or "none",
            )
    finally:
        if out is not sys.stdout:
            out.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
