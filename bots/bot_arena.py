"""Headless arena: four computer seats play full games of Hearts."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Iterable, Optional

from hearts.events import ShootTheMoon
from hearts.game import HUMAN_SEAT, Game, InvariantViolation
from hearts.rules_schema import GameRules

from .base import Difficulty

logger = logging.getLogger(__name__)


def _drive_human_seat(game: Game, rng: Random) -> list:
    """Let the strategy for ``game.ai_difficulty`` make the human seat's decision."""
    seat = game.player(HUMAN_SEAT)
    if game.valid_plays():
        card = seat.select_play(
            game.trick.plays,
            is_first_trick=game.is_first_trick,
            hearts_broken=game.hearts_broken,
            context=game.context_for(HUMAN_SEAT),
            rng=rng,
        )
        return game.human_play_card(card)
    cards = seat.select_pass_cards(game.context_for(HUMAN_SEAT), rng)
    return game.human_pass_cards(cards)


def play_game(game: Game, *, rng: Optional[Random] = None) -> dict:
    rng = rng or Random()
    events = game.new_game()
    events += game.run_until_input()
    while game.winner is None:
        step = _drive_human_seat(game, rng)
        if not step:
            raise InvariantViolation(f"Seat {HUMAN_SEAT} decision rejected in state {game.state.name}.")
        events += step
        events += game.run_until_input()

    return {
        "totals": tuple(player.total_score for player in game.players),
        "winner": game.winner,
        "rounds": game.round_number,
        "moon_shots": sum(1 for event in events if isinstance(event, ShootTheMoon)),
    }


def run_match(
    difficulty: Difficulty = Difficulty.MEDIUM,
    *,
    n_games: int = 10,
    seed: Optional[int] = None,
    rules: Optional[GameRules] = None,
) -> dict:
    wins = [0, 0, 0, 0]
    history = []
    for idx in range(n_games):
        game_seed = None if seed is None else seed + idx * 2
        game = Game(seed=game_seed, rules=rules, difficulty=difficulty)
        game.player(HUMAN_SEAT).difficulty = difficulty
        result = play_game(game, rng=Random(game_seed))
        wins[result["winner"]] += 1
        history.append(result)
        logger.info("Game %d: totals=%s winner=%d", idx + 1, result["totals"], result["winner"])
    return {"wins": wins, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run computer-only Hearts games.")
    parser.add_argument("--difficulty", default=Difficulty.MEDIUM.value, choices=[d.value for d in Difficulty])
    parser.add_argument("--games", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--end-score", type=int, default=100)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    rules = GameRules(end_score=args.end_score)
    results = run_match(Difficulty(args.difficulty), n_games=args.games, seed=args.seed, rules=rules)

    print(f"Wins by seat after {args.games} games: {results['wins']}")
    moons = sum(entry["moon_shots"] for entry in results["history"])
    rounds = sum(entry["rounds"] for entry in results["history"])
    print(f"Rounds played: {rounds}, moon shots: {moons}")


if __name__ == "__main__":
    main()
