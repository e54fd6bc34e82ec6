"""Game state machine for a four-seat game of Hearts."""

from __future__ import annotations

import copy
import logging
from random import Random
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from bots import Difficulty

from .cards import TWO_OF_CLUBS, Card, Suit
from .context import GameContext
from .deck import NUM_SEATS, build_deck, deal_hands
from .events import (
    CardPlayed,
    CardsDealt,
    CurrentSeatChanged,
    Event,
    GameEnded,
    GameState,
    HeartsBroken,
    PassDirection,
    PassDirectionAnnounced,
    PassingComplete,
    RoundEnded,
    ScoresChanged,
    ShootTheMoon,
    StateChanged,
    TrickWon,
    UndoAvailabilityChanged,
    UndoPerformed,
)
from .player import Player
from .rules_schema import GameRules
from .scoring import RoundScoreResult, find_moon_shooter, find_winner, is_game_over, score_round
from .snapshot import GameSnapshot, SeatSnapshot, UndoStack
from .trick import Trick

logger = logging.getLogger(__name__)

HUMAN_SEAT = 0
CARDS_TO_PASS = 3
SEAT_NAMES = ("You", "West", "North", "East")
FULL_DECK = frozenset(build_deck())
UNDOABLE_STATES = frozenset({GameState.WAITING_FOR_PASS, GameState.WAITING_FOR_PLAY, GameState.GAME_OVER})


class InvariantViolation(RuntimeError):
    """Raised when the table reaches a state the rules can never produce."""


def pass_direction_for_round(round_number: int, *, hold_round: bool = False) -> PassDirection:
    cycle = [PassDirection.LEFT, PassDirection.RIGHT, PassDirection.ACROSS]
    if hold_round:
        cycle.append(PassDirection.HOLD)
    return cycle[(round_number - 1) % len(cycle)]


class Game:
    """Sequence deal, pass, play and scoring for one human and three computer seats.

    Public commands return the events raised while they ran. Transitions that a
    user interface would normally pace with a delay (AI turns, trick resolution,
    the next deal) are left pending; ``advance()`` runs the next one and
    ``run_until_input()`` runs them until the human must act or the game ends.
    """

    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        rules: Optional[GameRules] = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        ai_rng: Optional[Random] = None,
        deck: Optional[Sequence[Card]] = None,
    ) -> None:
        self.rules = rules or GameRules.standard()
        self._pending_rules: Optional[GameRules] = None
        self._deal_rng = Random(seed)
        if ai_rng is None:
            ai_rng = Random(None if seed is None else seed + 1)
        self._ai_rng = ai_rng
        self._stacked_deck = list(deck) if deck is not None else None

        self.players = [
            Player(seat, SEAT_NAMES[seat], is_human=seat == HUMAN_SEAT, difficulty=difficulty)
            for seat in range(NUM_SEATS)
        ]
        self.state = GameState.NOT_STARTED
        self.round_number = 0
        self.pass_direction = PassDirection.LEFT
        self.current_seat = HUMAN_SEAT
        self.hearts_broken = False
        self.is_first_trick = True
        self.lead_suit: Optional[Suit] = None
        self.trick = Trick()
        self.passed_cards: List[List[Card]] = [[] for _ in range(NUM_SEATS)]
        self.taken: List[List[Card]] = [[] for _ in range(NUM_SEATS)]
        self.winner: Optional[int] = None
        self.last_round: Optional[RoundScoreResult] = None

        self._undo = UndoStack()
        self._next_step: Optional[Callable[[], None]] = None
        self._events: List[Event] = []

    # Configuration -----------------------------------------------------

    @property
    def ai_difficulty(self) -> Difficulty:
        return self.players[1].difficulty

    def set_ai_difficulty(self, difficulty: Difficulty) -> None:
        for player in self.players:
            if not player.is_human:
                player.difficulty = difficulty

    def set_rules(self, rules: GameRules) -> None:
        """Apply ``rules`` now if no game is running, otherwise from the next game."""
        if self.state in (GameState.NOT_STARTED, GameState.GAME_OVER):
            self.rules = rules
            self._pending_rules = None
        else:
            self._pending_rules = rules

    # Driving the machine -----------------------------------------------

    def new_game(self) -> List[Event]:
        if self._pending_rules is not None:
            self.rules, self._pending_rules = self._pending_rules, None
        self.round_number = 0
        self.winner = None
        self.last_round = None
        self._undo.clear()
        self._next_step = None
        for player in self.players:
            player.reset_scores()
            player.reset_memory()

        self._emit_scores()
        self._emit(UndoAvailabilityChanged(False))
        self.deal_cards()
        return self._drain()

    def advance(self) -> List[Event]:
        """Run the pending automatic transition, if any."""
        step, self._next_step = self._next_step, None
        if step is not None:
            step()
        return self._drain()

    def run_until_input(self) -> List[Event]:
        events: List[Event] = []
        while self._next_step is not None:
            events.extend(self.advance())
        return events

    @property
    def has_pending_step(self) -> bool:
        return self._next_step is not None

    # Dealing and passing ------------------------------------------------

    def deal_cards(self) -> None:
        self._set_state(GameState.DEALING)
        self.round_number += 1
        self.pass_direction = pass_direction_for_round(self.round_number, hold_round=self.rules.hold_round)

        hands = deal_hands(rng=self._deal_rng, deck=self._stacked_deck)
        for player, hand in zip(self.players, hands):
            player.set_hand(hand)
            player.round_score = 0
            player.reset_memory()
        self.taken = [[] for _ in range(NUM_SEATS)]
        self.trick.clear()
        self.lead_suit = None
        self.hearts_broken = False
        self.is_first_trick = True

        self._emit(CardsDealt(self.round_number))
        self._schedule(self.start_passing)

    def start_passing(self) -> None:
        self._set_state(GameState.PASSING)
        self._emit(PassDirectionAnnounced(self.pass_direction))
        self.passed_cards = [[] for _ in range(NUM_SEATS)]

        if self.pass_direction is PassDirection.HOLD:
            self._schedule(self.start_playing)
            return

        for player in self.players:
            if not player.is_human:
                self.passed_cards[player.seat] = player.select_pass_cards(
                    self.context_for(player.seat), self._ai_rng
                )
        self._set_state(GameState.WAITING_FOR_PASS)

    def valid_pass_cards(self) -> List[Card]:
        return list(self.players[HUMAN_SEAT].hand)

    def human_pass_cards(self, cards: Iterable[Card]) -> List[Event]:
        cards = list(cards)
        if self.state is not GameState.WAITING_FOR_PASS:
            logger.debug("Ignoring pass outside of the passing window (state=%s).", self.state.name)
            return []
        human = self.players[HUMAN_SEAT]
        if len(cards) != CARDS_TO_PASS or len(set(cards)) != CARDS_TO_PASS:
            logger.debug("Ignoring pass of %d cards.", len(cards))
            return []
        if not all(human.has_card(card) for card in cards):
            logger.debug("Ignoring pass of cards not held: %s", [str(card) for card in cards])
            return []

        self.save_snapshot()
        self.passed_cards[HUMAN_SEAT] = cards
        self.execute_passing()
        return self._drain()

    def execute_passing(self) -> None:
        offset = self.pass_direction.offset
        receiving: List[List[Card]] = [[] for _ in range(NUM_SEATS)]
        for seat in range(NUM_SEATS):
            receiving[(seat + offset) % NUM_SEATS] = list(self.passed_cards[seat])

        for player in self.players:
            player.remove_cards(self.passed_cards[player.seat])
        for player in self.players:
            player.add_cards(receiving[player.seat])

        self._set_state(GameState.PASSING)
        self._emit(PassingComplete(tuple(receiving[HUMAN_SEAT])))
        self._schedule(self.start_playing)

    # Trick play ---------------------------------------------------------

    def start_playing(self) -> None:
        self._set_state(GameState.PLAYING)
        self.hearts_broken = False
        self.is_first_trick = True
        self.trick.clear()
        self.lead_suit = None
        self._assert_card_conservation()

        self.current_seat = self.find_two_of_clubs_seat()
        self._emit(CurrentSeatChanged(self.current_seat))
        self._await_turn()

    def find_two_of_clubs_seat(self) -> int:
        for player in self.players:
            if player.has_card(TWO_OF_CLUBS):
                return player.seat
        raise InvariantViolation("Nobody holds the two of clubs.")

    def valid_plays_for(self, seat: int) -> List[Card]:
        return self.players[seat].valid_plays(
            self.trick.lead_suit(),
            is_first_trick=self.is_first_trick,
            hearts_broken=self.hearts_broken,
        )

    def valid_plays(self) -> List[Card]:
        """Legal cards for the human, empty when it is not the human's turn."""
        if self.state is not GameState.WAITING_FOR_PLAY or self.current_seat != HUMAN_SEAT:
            return []
        return self.valid_plays_for(HUMAN_SEAT)

    def human_play_card(self, card: Card) -> List[Event]:
        if self.state is not GameState.WAITING_FOR_PLAY or self.current_seat != HUMAN_SEAT:
            logger.debug("Ignoring play of %s outside of the human turn.", card)
            return []
        if card not in self.valid_plays():
            logger.debug("Ignoring illegal play of %s.", card)
            return []

        self.save_snapshot()
        self._set_state(GameState.PLAYING)
        self._play(HUMAN_SEAT, card)
        return self._drain()

    def ai_turn(self) -> None:
        seat = self.current_seat
        player = self.players[seat]
        if player.is_human:
            raise InvariantViolation("AI turn scheduled for the human seat.")
        card = player.select_play(
            self.trick.plays,
            is_first_trick=self.is_first_trick,
            hearts_broken=self.hearts_broken,
            context=self.context_for(seat),
            rng=self._ai_rng,
        )
        if card not in self.valid_plays_for(seat):
            raise InvariantViolation(f"{player.name} chose illegal card {card}.")
        logger.debug("%s (%s) plays %s", player.name, player.difficulty.value, card)
        self._play(seat, card)

    def _play(self, seat: int, card: Card) -> None:
        self.players[seat].remove_card(card)
        if self.trick.is_empty():
            self.lead_suit = card.suit
        self.trick.add_play(seat, card)

        for observer in self.players:
            observer.memory.record_card(card, seat, self.lead_suit)

        if not self.hearts_broken and (
            card.is_heart or (self.rules.queen_breaks_hearts and card.is_queen_of_spades)
        ):
            self.hearts_broken = True
            self._emit(HeartsBroken(card))

        self._emit(CardPlayed(seat, card))
        self._next_turn()

    def _next_turn(self) -> None:
        if self.trick.is_full():
            self._schedule(self.complete_trick)
            return
        self.current_seat = (self.current_seat + 1) % NUM_SEATS
        self._emit(CurrentSeatChanged(self.current_seat))
        self._await_turn()

    def _await_turn(self) -> None:
        if self.players[self.current_seat].is_human:
            self._set_state(GameState.WAITING_FOR_PLAY)
        else:
            self._set_state(GameState.PLAYING)
            self._schedule(self.ai_turn)

    def determine_trick_winner(self) -> int:
        seat, _ = self.trick.winning_play()
        return seat

    def complete_trick(self) -> None:
        if not self.trick.is_full():
            raise InvariantViolation(f"Resolving a trick of {len(self.trick)} cards.")
        self._set_state(GameState.TRICK_COMPLETE)

        winner = self.determine_trick_winner()
        points = self.trick.points()
        self.players[winner].add_round_points(points)
        self.taken[winner].extend(self.trick.cards())
        self._emit(TrickWon(winner, points))
        self._emit_scores()

        self.trick.clear()
        self.lead_suit = None
        self.is_first_trick = False
        self._assert_card_conservation()

        if not self.players[winner].hand:
            if any(player.hand for player in self.players):
                raise InvariantViolation("Hands emptied unevenly.")
            self._schedule(self.end_round)
            return

        self.current_seat = winner
        self._emit(CurrentSeatChanged(winner))
        self._await_turn()

    # Scoring ------------------------------------------------------------

    def check_moon_shot(self) -> Optional[int]:
        return find_moon_shooter([player.round_score for player in self.players])

    def end_round(self) -> None:
        self._set_state(GameState.ROUND_COMPLETE)
        result = score_round(
            round_points=[player.round_score for player in self.players],
            prior_totals=[player.total_score for player in self.players],
            rules=self.rules,
        )
        if result.shooter is not None:
            logger.info(
                "%s shot the moon%s.",
                self.players[result.shooter].name,
                " (protected)" if result.moon_protected else "",
            )
            self._emit(ShootTheMoon(result.shooter, result.moon_protected))

        for player, total in zip(self.players, result.new_totals):
            player.round_score = 0
            player.total_score = total
        self.last_round = result

        logger.info("Round %d scored: deltas=%s totals=%s", self.round_number, result.deltas, result.new_totals)
        self._emit(RoundEnded(self.round_number, result.deltas))
        self._emit_scores()

        if is_game_over(result.new_totals, self.rules.end_score):
            self.end_game()
            return
        self._schedule(self.deal_cards)

    def end_game(self) -> None:
        self._set_state(GameState.GAME_OVER)
        self.winner = find_winner([player.total_score for player in self.players])
        logger.info("Game over after %d rounds; %s wins.", self.round_number, self.players[self.winner].name)
        self._emit(GameEnded(self.winner))
        self._emit(UndoAvailabilityChanged(self.can_undo()))

    # Undo ---------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            state=self.state,
            round_number=self.round_number,
            pass_direction=self.pass_direction,
            current_seat=self.current_seat,
            hearts_broken=self.hearts_broken,
            is_first_trick=self.is_first_trick,
            lead_suit=self.lead_suit,
            trick=tuple(self.trick.plays),
            seats=tuple(
                SeatSnapshot(
                    hand=tuple(player.hand),
                    round_score=player.round_score,
                    total_score=player.total_score,
                    memory=copy.deepcopy(player.memory),
                    passed_cards=tuple(self.passed_cards[player.seat]),
                    taken=tuple(self.taken[player.seat]),
                )
                for player in self.players
            ),
            last_round=self.last_round,
            deal_rng_state=self._deal_rng.getstate(),
            ai_rng_state=self._ai_rng.getstate(),
        )

    def save_snapshot(self) -> None:
        self._undo.push(self.snapshot())
        self._emit(UndoAvailabilityChanged(True))

    def can_undo(self) -> bool:
        return bool(self._undo) and self.state in UNDOABLE_STATES

    def undo(self) -> List[Event]:
        if not self.can_undo():
            return []
        self._restore(self._undo.pop())
        self._emit(StateChanged(self.state))
        self._emit_scores()
        self._emit(CurrentSeatChanged(self.current_seat))
        self._emit(UndoPerformed(self.state))
        self._emit(UndoAvailabilityChanged(bool(self._undo)))
        return self._drain()

    def _restore(self, snapshot: GameSnapshot) -> None:
        self.state = snapshot.state
        self.round_number = snapshot.round_number
        self.pass_direction = snapshot.pass_direction
        self.current_seat = snapshot.current_seat
        self.hearts_broken = snapshot.hearts_broken
        self.is_first_trick = snapshot.is_first_trick
        self.lead_suit = snapshot.lead_suit
        self.trick = Trick(list(snapshot.trick))
        for player, seat in zip(self.players, snapshot.seats):
            player.hand = list(seat.hand)
            player.round_score = seat.round_score
            player.total_score = seat.total_score
            player.memory = copy.deepcopy(seat.memory)
        self.passed_cards = [list(seat.passed_cards) for seat in snapshot.seats]
        self.taken = [list(seat.taken) for seat in snapshot.seats]
        self.last_round = snapshot.last_round
        self._deal_rng.setstate(snapshot.deal_rng_state)
        self._ai_rng.setstate(snapshot.ai_rng_state)
        self.winner = None
        self._next_step = None

    # Queries ------------------------------------------------------------

    def player(self, seat: int) -> Player:
        return self.players[seat]

    def current_trick(self) -> Tuple[Card, ...]:
        return tuple(self.trick.cards())

    def trick_seats(self) -> Tuple[int, ...]:
        return tuple(self.trick.seats())

    def context_for(self, seat: int) -> GameContext:
        return GameContext(
            seat=seat,
            total_scores=tuple(player.total_score for player in self.players),
            round_scores=tuple(player.round_score for player in self.players),
            round_number=self.round_number,
            end_score=self.rules.end_score,
            moon_protection=self.rules.moon_protection,
            cards_in_hand=tuple(len(player.hand) for player in self.players),
        )

    # Internals ----------------------------------------------------------

    def _emit(self, event: Event) -> None:
        self._events.append(event)

    def _emit_scores(self) -> None:
        self._emit(
            ScoresChanged(
                round_scores=tuple(player.round_score for player in self.players),
                total_scores=tuple(player.total_score for player in self.players),
            )
        )

    def _drain(self) -> List[Event]:
        events, self._events = self._events, []
        return events

    def _set_state(self, state: GameState) -> None:
        if state is self.state:
            return
        self.state = state
        self._emit(StateChanged(state))

    def _schedule(self, step: Callable[[], None]) -> None:
        if self._next_step is not None:
            raise InvariantViolation("A transition is already pending.")
        self._next_step = step

    def _assert_card_conservation(self) -> None:
        cards = [card for player in self.players for card in player.hand]
        cards.extend(self.trick.cards())
        cards.extend(card for pile in self.taken for card in pile)
        if len(cards) != len(FULL_DECK) or set(cards) != FULL_DECK:
            raise InvariantViolation(f"Card conservation broken: {len(cards)} cards on the table.")
