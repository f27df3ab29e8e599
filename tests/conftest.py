"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chesslaw.core.types import parse_square
from chesslaw.game.engine import Engine
from chesslaw.game.state import GameSession, MoveRecord

PlayFn = Callable[..., list[MoveRecord]]


@pytest.fixture
def engine() -> Engine:
    return Engine()


@pytest.fixture
def session(engine: Engine) -> GameSession:
    return engine.new_game()


@pytest.fixture
def play(engine: Engine) -> PlayFn:
    """Submit moves written as ``"e2e4"``; fails the test on a rejection."""

    def _play(session: GameSession, *moves: str) -> list[MoveRecord]:
        records: list[MoveRecord] = []
        for text in moves:
            result = engine.submit_move(
                session, parse_square(text[:2]), parse_square(text[2:4])
            )
            assert isinstance(result, MoveRecord), f"{text} rejected: {result}"
            records.append(result)
        return records

    return _play
