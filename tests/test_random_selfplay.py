"""Random self-play runner tests."""

import json

import pytest

from scotlandyard.ai.random_ai import RandomAI
from scotlandyard.errors import ConfigurationError
from scotlandyard.models import AIConfig, Colour, PassMove, Ticket, TicketMove
from scotlandyard.selfplay import load_game_setup, main, play_random_game

SETUP_YAML = """\
rounds: [false, true, false, false, true]
graph:
  edges:
    - {from: 1, to: 2, transport: taxi}
    - {from: 1, to: 3, transport: bus}
    - {from: 2, to: 4, transport: taxi}
    - {from: 3, to: 4, transport: taxi}
    - {from: 4, to: 5, transport: underground}
    - {from: 5, to: 6, transport: taxi}
    - {from: 6, to: 7, transport: bus}
    - {from: 7, to: 8, transport: ferry}
players:
  - {colour: black, location: 1,
     tickets: {taxi: 4, bus: 3, underground: 3, double: 1, secret: 2}}
  - {colour: blue, location: 6,
     tickets: {taxi: 10, bus: 8, underground: 4, double: 0, secret: 0}}
"""


@pytest.fixture
def setup_path(tmp_path):
    path = tmp_path / "setup.yaml"
    path.write_text(SETUP_YAML)
    return path


def test_load_game_setup(setup_path):
    setup = load_game_setup(setup_path)
    assert setup.rounds == [False, True, False, False, True]
    assert [p.colour for p in setup.players] == [Colour.BLACK, Colour.BLUE]
    assert setup.players[0].tickets[Ticket.SECRET] == 2
    assert len(setup.build_graph()) == 8


def test_load_game_setup_needs_two_players(tmp_path):
    path = tmp_path / "setup.yaml"
    path.write_text(
        "rounds: [false]\n"
        "graph: {edges: [{from: 1, to: 2, transport: taxi}]}\n"
        "players:\n"
        "  - {colour: black, location: 1, tickets: {taxi: 1}}\n"
    )
    with pytest.raises(ConfigurationError):
        load_game_setup(path)


def test_bad_graph_is_a_configuration_error(tmp_path):
    path = tmp_path / "setup.yaml"
    path.write_text(SETUP_YAML.replace("transport: ferry", "transport: boat"))
    setup = load_game_setup(path)
    with pytest.raises(ConfigurationError):
        setup.build_graph()


def test_random_game_completes(setup_path):
    result = play_random_game(load_game_setup(setup_path), seed=3)

    assert result['completed'] is True
    assert result['num_players'] == 2
    assert result['winners'] in (["black"], ["blue"])
    assert 1 <= result['rounds_played'] <= 5
    assert result['move_count'] == len(result['moves'])
    assert result['seed'] == 3


def test_same_seed_same_game(setup_path):
    setup = load_game_setup(setup_path)
    first = play_random_game(setup, seed=11)
    second = play_random_game(setup, seed=11)

    assert first['moves'] == second['moves']
    assert first['winners'] == second['winners']
    assert first['rounds_played'] == second['rounds_played']


def test_main_writes_jsonl(setup_path, tmp_path):
    output = tmp_path / "games.jsonl"

    code = main([str(setup_path), "--num-games", "2", "--seed", "5", "--output", str(output)])

    assert code == 0
    lines = output.read_text().splitlines()
    assert len(lines) == 2
    records = [json.loads(line) for line in lines]
    assert [r['seed'] for r in records] == [5, 6]
    assert all(r['completed'] for r in records)


class TestRandomAI:

    def test_seeded_choice_is_reproducible(self):
        moves = frozenset(
            TicketMove(colour=Colour.BLACK, ticket=Ticket.TAXI, destination=d)
            for d in range(1, 20)
        )
        picks = [
            RandomAI(Colour.BLACK, AIConfig(rng_seed=42)).choose_move(None, 1, moves)
            for _ in range(3)
        ]
        assert len(set(picks)) == 1
        assert picks[0] in moves

    def test_single_option_is_taken(self):
        ai = RandomAI(Colour.BLUE)
        move = ai.choose_move(None, 6, frozenset({PassMove(colour=Colour.BLUE)}))
        assert move == PassMove(colour=Colour.BLUE)
        assert ai.move_count == 1

    def test_default_seeds_differ_by_colour(self):
        assert RandomAI(Colour.BLUE).rng_seed != RandomAI(Colour.RED).rng_seed

    def test_config_accepts_camel_case(self):
        config = AIConfig.model_validate({"rngSeed": 9, "thinkTime": 0})
        assert config.rng_seed == 9
        assert config.think_time == 0
