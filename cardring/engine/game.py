# cardring/engine/game.py

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from cardring.common.cards import CardLike, ranks, to_cards
from cardring.common.constants import CARDS_PER_PLAYER, HAND_SIZE, TURN_DELAY_SEC
from cardring.common.errors import require
from cardring.common.logging_utils import get_logger, log_event
from cardring.engine.deck import Deck, build_ring
from cardring.engine.log_sink import LogSink, MemorySink
from cardring.engine.player import Player
from cardring.engine.winner_gate import WinnerGate

log = get_logger("engine.game")


@dataclass(frozen=True)
class GameResult:
    winner_id: Optional[int]
    deck_contents: Dict[int, Tuple[int, ...]]  # ascending ranks
    hands: Dict[int, Tuple[int, ...]]          # hand order


class Game:
    """Owns the deck ring and the players; deals, arbitrates the winner, shuts down."""

    def __init__(
        self,
        n: int,
        pack: Optional[Iterable[CardLike]] = None,
        sink: Optional[LogSink] = None,
        turn_delay: float = TURN_DELAY_SEC,
    ) -> None:
        require(isinstance(n, int) and n >= 1, f"Number of players must be positive. Received: {n}")
        self.n = n
        self.sink: LogSink = sink if sink is not None else MemorySink()
        self.decks: List[Deck] = build_ring(n)
        self.players: List[Player] = [
            Player(
                i,
                left_deck=self.decks[i - 1],
                right_deck=self.decks[i % n],
                game=self,
                sink=self.sink,
                turn_delay=turn_delay,
            )
            for i in range(1, n + 1)
        ]
        self._pack = list(pack) if pack is not None else None
        self._gate = WinnerGate()
        self._threads: List[threading.Thread] = []
        self._dealt = False
        self._ran = False

    # ---- state ----

    @property
    def ended(self) -> bool:
        return self._gate.ended

    @property
    def winner_id(self) -> Optional[int]:
        return self._gate.winner

    @property
    def threads_started(self) -> bool:
        return bool(self._threads)

    def player(self, player_id: int) -> Player:
        require(1 <= player_id <= self.n, f"No player {player_id} in a {self.n}-player game")
        return self.players[player_id - 1]

    # ---- setup ----

    def deal(self, pack: Optional[Iterable[CardLike]] = None) -> None:
        """First 4n cards round-robin into hands, the remaining 4n round-robin into decks."""
        require(not self._dealt, "Cards have already been dealt")
        source = list(pack) if pack is not None else self._pack
        require(source is not None, "No pack to deal from")
        cards = to_cards(source)
        expected = CARDS_PER_PLAYER * self.n
        require(len(cards) == expected, f"Pack must contain exactly {expected} cards, got {len(cards)}")

        split = HAND_SIZE * self.n
        for i, card in enumerate(cards[:split]):
            self.players[i % self.n].receive(card)
        for i, card in enumerate(cards[split:]):
            self.decks[i % self.n].append(card)

        self._dealt = True
        log.debug(f"Dealt {len(cards)} cards to {self.n} players")

    # ---- termination ----

    def declare_winner(self, actor_id: int) -> bool:
        """
        Only the first call gets through the gate; it records the winner and
        cancels every other player. Later calls change nothing and return False.
        """
        require(
            isinstance(actor_id, int) and 1 <= actor_id <= self.n,
            f"No player {actor_id} in a {self.n}-player game",
        )
        if not self._gate.try_claim(actor_id):
            log.debug(f"Player {actor_id} reached the gate after player {self._gate.winner}")
            return False

        log.info(f"Player {actor_id} wins")
        for p in self.players:
            if p.player_id != actor_id:
                p.cancel()
        return True

    def abort(self) -> None:
        """Cancel every player without a winner (e.g. on Ctrl+C)."""
        log.warning("Aborting game: cancelling all players")
        for p in self.players:
            p.cancel()

    # ---- run ----

    def run(self) -> GameResult:
        require(not self._ran, "Game has already been run")
        self._ran = True
        if not self._dealt:
            self.deal()

        for p in self.players:
            p.log_initial_hand()

        pre_dealt = next((p for p in self.players if p.has_winning_hand()), None)
        if pre_dealt is not None:
            log.info(f"Player {pre_dealt.player_id} was dealt a winning hand")
            self.declare_winner(pre_dealt.player_id)
            pre_dealt.exit_as_winner()
            for p in self.players:
                if p is not pre_dealt:
                    p.exit_as_loser()
        else:
            self._run_threads()

        self._write_deck_reports()
        return self.result()

    def _run_threads(self) -> None:
        for p in self.players:
            t = threading.Thread(target=p.run, name=f"player-{p.player_id}", daemon=True)
            self._threads.append(t)
        for t in self._threads:
            t.start()
        log.info(f"Started {len(self._threads)} player threads")

        try:
            for t in self._threads:
                t.join()
        except KeyboardInterrupt:
            self.abort()
            for t in self._threads:
                t.join()
            raise

    def _write_deck_reports(self) -> None:
        for deck in self.decks:
            line = deck.describe()
            self.sink.write(deck.stream_id, line)
            log_event(log, deck.stream_id, line)

    def result(self) -> GameResult:
        return GameResult(
            winner_id=self.winner_id,
            deck_contents={d.deck_id: ranks(d.snapshot()) for d in self.decks},
            hands={p.player_id: ranks(p.hand_snapshot()) for p in self.players},
        )
