"""Validation schema for the Hearts rule set."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GameRules(BaseModel):
    """Rule variants for one game; frozen so a round never sees them change."""

    model_config = ConfigDict(frozen=True)

    end_score: int = Field(100, description="The game ends once any seat's total reaches this score.")
    exact_reset_to_50: bool = Field(
        False,
        description="A seat whose total lands exactly on the end score is reset to 50.",
    )
    queen_breaks_hearts: bool = Field(
        True,
        description="Playing the queen of spades lifts the restriction on leading hearts.",
    )
    moon_protection: bool = Field(
        False,
        description="A moon shooter takes -26 instead when +26 to the others would lose them the game.",
    )
    full_polish: bool = Field(False, description="A seat on 99 that takes 25 more is reset to 98.")
    hold_round: bool = Field(
        False,
        description="Add a fourth, no-pass round to the left/right/across passing cycle.",
    )

    @classmethod
    def standard(cls) -> "GameRules":
        return cls()
