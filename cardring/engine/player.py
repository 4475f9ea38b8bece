# cardring/engine/player.py

import threading
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from cardring.common.cards import Card
from cardring.common.constants import PLAYER_STREAM, TURN_DELAY_SEC
from cardring.common.errors import require
from cardring.common.logging_utils import get_logger, log_event
from cardring.common.rules import choose_discard, format_hand, has_winning_hand
from cardring.engine.deck import Deck
from cardring.engine.log_sink import LogSink

if TYPE_CHECKING:
    from cardring.engine.game import Game

log = get_logger("engine.player")


class PlayerState(Enum):
    INIT = "init"
    DEALT = "dealt"
    RUNNING = "running"
    TURN = "turn"
    WON = "won"
    LOST = "lost"
    EXITED = "exited"


class Player:
    """
    One player: a private hand plus the decks on its left and right.

    ``run()`` is the thread target. The loop stops when the hand wins, when
    the coordinator cancels it, or when the game has ended. Every way out
    goes through exactly one exit sequence in the player's log stream.
    """

    def __init__(
        self,
        player_id: int,
        left_deck: Deck,
        right_deck: Deck,
        game: "Game",
        sink: LogSink,
        preferred_rank: Optional[int] = None,
        initial_hand: Iterable[Card] = (),
        turn_delay: float = TURN_DELAY_SEC,
    ) -> None:
        require(
            isinstance(player_id, int) and player_id >= 1,
            f"Player ID must be positive. Received: {player_id}",
        )
        require(left_deck is not None and right_deck is not None, "Player needs both a left and a right deck")

        self.player_id = player_id
        self.preferred_rank = player_id if preferred_rank is None else preferred_rank
        self.left_deck = left_deck
        self.right_deck = right_deck
        self.game = game
        self.sink = sink
        self.turn_delay = turn_delay
        self.state = PlayerState.INIT

        self._hand: List[Card] = list(initial_hand)
        self._turn_lock = threading.Lock()
        self._cancelled = threading.Event()
        self._exit_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Player(player_id={self.player_id}, state={self.state.name}, hand=[{format_hand(self._hand)}])"

    @property
    def stream_id(self) -> str:
        return PLAYER_STREAM.format(id=self.player_id)

    # ---- hand ----

    def receive(self, card: Card) -> None:
        """Dealing hook. Only valid before the player starts playing."""
        require(self.state is PlayerState.INIT, f"Player {self.player_id} cannot be dealt cards once dealt")
        require(isinstance(card, Card), f"Player {self.player_id} can only be dealt cards, got {card!r}")
        self._hand.append(card)

    def hand_snapshot(self) -> Tuple[Card, ...]:
        return tuple(self._hand)

    def has_winning_hand(self) -> bool:
        return has_winning_hand(self._hand)

    def choose_discard(self) -> Card:
        return choose_discard(self._hand, self.preferred_rank)

    # ---- cancellation ----

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def _should_stop(self) -> bool:
        return self._cancelled.is_set() or self.game.ended

    # ---- game log ----

    def _emit(self, line: str) -> None:
        self.sink.write(self.stream_id, line)
        log_event(log, self.stream_id, line)

    def log_initial_hand(self) -> None:
        self.state = PlayerState.DEALT
        self._emit(f"player {self.player_id} initial hand {format_hand(self._hand)}")

    # ---- turn ----

    def play_turn(self) -> bool:
        """
        Draw from the left deck, discard to the right deck.
        Returns False (nothing discarded) if the left deck was empty.
        """
        with self._turn_lock:
            drawn = self.left_deck.draw()
            if drawn is None:
                return False

            self._hand.append(drawn)
            self._emit(f"player {self.player_id} draws a {drawn} from deck {self.left_deck.deck_id}")

            discard = self.choose_discard()
            self._hand.remove(discard)
            self.right_deck.append(discard)
            self._emit(f"player {self.player_id} discards a {discard} to deck {self.right_deck.deck_id}")
            self._emit(f"player {self.player_id} current hand is {format_hand(self._hand)}")
            return True

    def _play_until_done(self) -> bool:
        while not self._should_stop():
            self.state = PlayerState.TURN
            drew = self.play_turn()
            self.state = PlayerState.RUNNING

            if not drew:
                if self._should_stop():
                    break
            elif self.has_winning_hand():
                if self.game.declare_winner(self.player_id):
                    return True
                # someone else got through the gate first
                break

            self._cancelled.wait(self.turn_delay)
        return False

    def run(self) -> None:
        self.state = PlayerState.RUNNING
        log.debug(f"Player {self.player_id} started: hand=[{format_hand(self._hand)}]")
        try:
            won = self._play_until_done()
        except Exception:
            log.exception(f"Unexpected error in player {self.player_id}")
            self._emit(f"player {self.player_id} encountered an unexpected error")
            # stay out of the ring until the game is decided
            self._cancelled.wait()
            won = False

        if won:
            self.exit_as_winner()
        else:
            self.exit_as_loser()

    # ---- exit sequences ----

    def exit_as_winner(self) -> None:
        with self._exit_lock:
            if self.state is PlayerState.EXITED:
                return
            self.state = PlayerState.WON
            self._emit(f"player {self.player_id} wins")
            self._emit(f"player {self.player_id} exits")
            self._emit(f"player {self.player_id} final hand: {format_hand(self._hand)}")
            self.state = PlayerState.EXITED

    def exit_as_loser(self) -> None:
        with self._exit_lock:
            if self.state is PlayerState.EXITED:
                return
            self.state = PlayerState.LOST
            winner = self.game.winner_id
            if winner is not None:
                self._emit(
                    f"player {winner} has informed player {self.player_id} that player {winner} has won"
                )
            self._emit(f"player {self.player_id} exits")
            self._emit(f"player {self.player_id} final hand: {format_hand(self._hand)}")
            self.state = PlayerState.EXITED
            log.debug(f"Player {self.player_id} exited (winner={winner})")
