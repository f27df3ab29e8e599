"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Rule and presentation options for an :class:`~chesslaw.game.Engine`.

    Args:
        strict_castling: Also refuse castling out of check or across an
            attacked square. Off by default: only the king's landing
            square is required to be safe.
        history_limit: Keep only this many numbered lines when rendering
            movetext (``None`` keeps all).
    """

    strict_castling: bool = False
    history_limit: int | None = None

    def __post_init__(self) -> None:
        if self.history_limit is not None and self.history_limit < 0:
            raise ValueError(f"history_limit must be >= 0: {self.history_limit}")
