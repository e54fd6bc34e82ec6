"""Convenience service layer for UI and HTTP consumers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Union

from bots import Difficulty

from .cards import Card, card_label, deserialize_card, serialize_card
from .events import Event, GameState, PassingComplete
from .game import HUMAN_SEAT, Game
from .rules_schema import GameRules
from .stats import SessionStatistics

logger = logging.getLogger(__name__)


@dataclass
class TrickPlayView:
    seat: int
    card: dict
    label: str


@dataclass
class PlayerView:
    seat: int
    name: str
    is_human: bool
    cards_in_hand: int
    round_score: int
    total_score: int


@dataclass
class TableView:
    state: str
    current_seat: int
    round_number: int
    pass_direction: str
    hearts_broken: bool
    is_first_trick: bool
    hand: List[dict]
    hand_labels: List[str]
    valid_cards: List[dict]
    valid_card_labels: List[str]
    received_cards: List[dict]
    trick: List[TrickPlayView]
    players: List[PlayerView]
    can_undo: bool
    winner: Optional[int]
    difficulty: str


class GameService:
    """Facade around Game that runs computer turns until the human must act."""

    def __init__(self, game: Optional[Game] = None, statistics: Optional[SessionStatistics] = None) -> None:
        self.game = game or Game()
        self.statistics = statistics or SessionStatistics()
        self.last_events: List[Event] = []
        self._received: List[Card] = []

    # Lifecycle ---------------------------------------------------------

    def start_new_game(self) -> TableView:
        events = self.game.new_game()
        self._settle(events)
        return self.get_table_view()

    def has_active_game(self) -> bool:
        return self.game.round_number > 0

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> None:
        self.game.set_ai_difficulty(Difficulty(difficulty))

    def set_rules(self, rules: Union[GameRules, Mapping[str, object]]) -> None:
        """Replace the rules, or merge a partial mapping over the current ones."""
        if not isinstance(rules, GameRules):
            rules = GameRules(**{**self.game.rules.model_dump(), **rules})
        self.game.set_rules(rules)

    # Actions -----------------------------------------------------------

    def pass_cards(self, payloads: Sequence[Mapping[str, str]]) -> TableView:
        self._require_game()
        cards = [deserialize_card(payload) for payload in payloads]
        self._settle(self.game.human_pass_cards(cards))
        return self.get_table_view()

    def play_card(self, payload: Mapping[str, str]) -> TableView:
        self._require_game()
        self._settle(self.game.human_play_card(deserialize_card(payload)))
        return self.get_table_view()

    def undo(self) -> TableView:
        self._require_game()
        events = self.game.undo()
        if events:
            self._received = []
        self._settle(events)
        return self.get_table_view()

    # Views -------------------------------------------------------------

    def get_table_view(self) -> TableView:
        game = self.game
        hand = game.player(HUMAN_SEAT).hand
        if game.state is GameState.WAITING_FOR_PASS:
            valid = game.valid_pass_cards()
        else:
            valid = game.valid_plays()

        return TableView(
            state=game.state.name.lower(),
            current_seat=game.current_seat,
            round_number=game.round_number,
            pass_direction=game.pass_direction.name.lower(),
            hearts_broken=game.hearts_broken,
            is_first_trick=game.is_first_trick,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            valid_cards=[serialize_card(card) for card in valid],
            valid_card_labels=[card_label(card) for card in valid],
            received_cards=[serialize_card(card) for card in self._received],
            trick=[
                TrickPlayView(seat=seat, card=serialize_card(card), label=card_label(card))
                for seat, card in game.trick.plays
            ],
            players=[
                PlayerView(
                    seat=player.seat,
                    name=player.name,
                    is_human=player.is_human,
                    cards_in_hand=len(player.hand),
                    round_score=player.round_score,
                    total_score=player.total_score,
                )
                for player in game.players
            ],
            can_undo=game.can_undo(),
            winner=game.winner,
            difficulty=game.ai_difficulty.value,
        )

    # Helpers -----------------------------------------------------------

    def _settle(self, events: List[Event]) -> None:
        """Run pending computer turns and record everything that happened."""
        if events:
            events = events + self.game.run_until_input()
        for event in events:
            if isinstance(event, PassingComplete):
                self._received = list(event.received)
        self.statistics.record(events)
        self.last_events = events
        logger.debug("Settled %d events; state=%s", len(events), self.game.state.name)

    def _require_game(self) -> None:
        if not self.has_active_game():
            raise RuntimeError("No active game.")
