"""Error hierarchy, environment configuration and prometheus counters."""

import pytest
from prometheus_client import REGISTRY

from scotlandyard import config, metrics
from scotlandyard.errors import (
    ConfigurationError,
    RulesViolationError,
    ScotlandYardError,
    ValidationError,
)
from scotlandyard.models import Colour, Ticket, TicketMove


def _sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestErrors:

    def test_configuration_error_is_a_validation_error(self):
        err = ConfigurationError("bad board")
        assert isinstance(err, ValidationError)
        assert isinstance(err, ScotlandYardError)
        assert err.code == "CONFIGURATION_ERROR"

    def test_rules_violation_carries_colour(self):
        err = RulesViolationError("Illegal move", colour="black", context={"move": "x"})
        assert err.colour == "black"
        assert err.to_dict() == {
            "code": "RULES_VIOLATION",
            "message": "Illegal move",
            "context": {"move": "x", "colour": "black"},
        }
        assert str(err).startswith("[RULES_VIOLATION] Illegal move (")

    def test_plain_str_without_context(self):
        assert str(ScotlandYardError("oops")) == "[SCOTLANDYARD_ERROR] oops"


class TestConfig:

    @pytest.mark.parametrize("raw,expected", [
        ("1", True), ("TRUE", True), (" yes ", True), ("on", True),
        ("0", False), ("off", False), ("", False),
    ])
    def test_env_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SCOTLANDYARD_TEST_FLAG", raw)
        assert config.env_flag("SCOTLANDYARD_TEST_FLAG") is expected

    def test_env_flag_default(self, monkeypatch):
        monkeypatch.delenv("SCOTLANDYARD_TEST_FLAG", raising=False)
        assert config.env_flag("SCOTLANDYARD_TEST_FLAG", "true") is True

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("SCOTLANDYARD_TEST_INT", "42")
        assert config.env_int("SCOTLANDYARD_TEST_INT", 7) == 42
        monkeypatch.setenv("SCOTLANDYARD_TEST_INT", "  ")
        assert config.env_int("SCOTLANDYARD_TEST_INT", 7) == 7


class TestMetrics:

    def test_moves_and_rounds_are_counted(self, game_factory, monkeypatch):
        monkeypatch.setattr(config, "METRICS_ENABLED", True)
        labels = {"kind": "ticket", "role": "mr_x"}
        moves_before = _sample("scotlandyard_moves_applied_total", labels)
        rounds_before = _sample("scotlandyard_rounds_started_total")

        game = game_factory()
        game.accept(TicketMove(colour=Colour.BLACK, ticket=Ticket.TAXI, destination=2))

        assert _sample("scotlandyard_moves_applied_total", labels) == moves_before + 1
        assert _sample("scotlandyard_rounds_started_total") == rounds_before + 1

    def test_disabled_metrics_record_nothing(self, monkeypatch):
        monkeypatch.setattr(config, "METRICS_ENABLED", False)
        labels = {"reason": "illegal"}
        before = _sample("scotlandyard_moves_rejected_total", labels)
        metrics.record_rejected_move("illegal")
        assert _sample("scotlandyard_moves_rejected_total", labels) == before

    def test_finished_game_is_counted(self, game_factory, monkeypatch):
        monkeypatch.setattr(config, "METRICS_ENABLED", True)
        labels = {"winner": "mr_x", "reason": "round_limit"}
        before = _sample("scotlandyard_games_completed_total", labels)

        game = game_factory(rounds=(False,))
        game.accept(TicketMove(colour=Colour.BLACK, ticket=Ticket.TAXI, destination=2))
        game.accept(TicketMove(colour=Colour.BLUE, ticket=Ticket.TAXI, destination=5))

        assert _sample("scotlandyard_games_completed_total", labels) == before + 1
