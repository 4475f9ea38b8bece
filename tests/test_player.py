import threading

import pytest

from cardring.common.cards import Card, ranks, to_cards
from cardring.common.errors import InvalidInput
from cardring.engine.deck import Deck
from cardring.engine.game import Game
from cardring.engine.log_sink import MemorySink
from cardring.engine.player import Player, PlayerState


class StubGame:
    """Gate that is always already taken by `winner_id`."""

    def __init__(self, winner_id=2):
        self.ended = False
        self.winner_id = winner_id
        self.calls = []

    def declare_winner(self, actor_id):
        self.calls.append(actor_id)
        return False


class BrokenDeck(Deck):
    def __init__(self, deck_id):
        super().__init__(deck_id)
        self.tripped = threading.Event()

    def draw(self):
        self.tripped.set()
        raise RuntimeError("boom")


def deal(player, *values):
    for c in to_cards(values):
        player.receive(c)


def test_player_id_must_be_positive():
    with pytest.raises(InvalidInput):
        Player(0, Deck(1), Deck(2), game=StubGame(), sink=MemorySink())


def test_preferred_rank_defaults_to_id():
    p = Player(3, Deck(3), Deck(1), game=StubGame(), sink=MemorySink())
    assert p.preferred_rank == 3
    assert p.state is PlayerState.INIT


def test_play_turn_draws_then_discards_non_preferred():
    game = Game(2, sink=MemorySink(), turn_delay=0)
    p1 = game.player(1)
    deal(p1, 1, 1, 5, 1)
    game.decks[0].append(Card(1))

    assert p1.play_turn() is True

    assert ranks(p1.hand_snapshot()) == (1, 1, 1, 1)
    assert ranks(game.decks[1].snapshot()) == (5,)
    assert len(game.decks[0]) == 0
    assert game.sink.lines("player1") == [
        "player 1 draws a 1 from deck 1",
        "player 1 discards a 5 to deck 2",
        "player 1 current hand is 1 1 1 1",
    ]


def test_play_turn_on_empty_deck_defers_discard():
    game = Game(2, sink=MemorySink(), turn_delay=0)
    p2 = game.player(2)
    deal(p2, 3, 2, 4, 6)

    assert p2.play_turn() is False
    assert ranks(p2.hand_snapshot()) == (3, 2, 4, 6)
    assert game.sink.lines("player2") == []


def test_receive_only_before_dealt():
    game = Game(2, sink=MemorySink(), turn_delay=0)
    p1 = game.player(1)
    deal(p1, 1, 2, 3, 4)
    p1.log_initial_hand()
    assert p1.state is PlayerState.DEALT
    assert game.sink.lines("player1") == ["player 1 initial hand 1 2 3 4"]
    with pytest.raises(InvalidInput):
        p1.receive(Card(9))


def test_run_wins_and_cancels_the_others():
    game = Game(2, sink=MemorySink(), turn_delay=0)
    p1 = game.player(1)
    deal(p1, 1, 1, 5, 1)
    game.decks[0].append(Card(1))

    p1.run()

    assert game.winner_id == 1
    assert game.player(2).cancelled
    assert p1.state is PlayerState.EXITED
    assert game.sink.lines("player1")[-3:] == [
        "player 1 wins",
        "player 1 exits",
        "player 1 final hand: 1 1 1 1",
    ]


def test_cancelled_player_exits_without_drawing():
    game = Game(2, sink=MemorySink(), turn_delay=0)
    p2 = game.player(2)
    deal(p2, 3, 4, 5, 6)
    game.decks[1].append(Card(2))

    assert game.declare_winner(1)
    p2.run()

    assert len(game.decks[1]) == 1
    assert game.sink.lines("player2") == [
        "player 1 has informed player 2 that player 1 has won",
        "player 2 exits",
        "player 2 final hand: 3 4 5 6",
    ]


def test_waiting_on_empty_deck_wakes_on_cancel():
    game = Game(2, sink=MemorySink(), turn_delay=0.005)
    p1 = game.player(1)
    deal(p1, 1, 2, 3, 4)

    t = threading.Thread(target=p1.run)
    t.start()
    game.declare_winner(2)
    t.join(timeout=5)

    assert not t.is_alive()
    assert game.sink.lines("player1")[-2:] == ["player 1 exits", "player 1 final hand: 1 2 3 4"]


def test_winning_hand_after_gate_taken_is_a_loss():
    stub = StubGame(winner_id=2)
    sink = MemorySink()
    left = Deck(1)
    left.append(Card(1))
    p1 = Player(1, left, Deck(2), game=stub, sink=sink,
                initial_hand=to_cards([1, 1, 5, 1]), turn_delay=0)

    p1.run()

    assert stub.calls == [1]
    assert "player 1 wins" not in sink.lines("player1")
    assert sink.lines("player1")[-3:] == [
        "player 2 has informed player 1 that player 2 has won",
        "player 1 exits",
        "player 1 final hand: 1 1 1 1",
    ]


def test_unexpected_error_still_exits_as_loser():
    stub = StubGame(winner_id=2)
    sink = MemorySink()
    broken = BrokenDeck(1)
    p1 = Player(1, broken, Deck(2), game=stub, sink=sink,
                initial_hand=to_cards([1, 2, 3, 4]), turn_delay=0)

    t = threading.Thread(target=p1.run)
    t.start()
    assert broken.tripped.wait(timeout=5)
    p1.cancel()
    t.join(timeout=5)

    assert not t.is_alive()
    assert sink.lines("player1") == [
        "player 1 encountered an unexpected error",
        "player 2 has informed player 1 that player 2 has won",
        "player 1 exits",
        "player 1 final hand: 1 2 3 4",
    ]


def test_exit_sequence_written_once():
    game = Game(2, sink=MemorySink(), turn_delay=0)
    p2 = game.player(2)
    deal(p2, 3, 4, 5, 6)
    game.declare_winner(1)

    p2.exit_as_loser()
    p2.exit_as_loser()

    assert game.sink.lines("player2").count("player 2 exits") == 1
