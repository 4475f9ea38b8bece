import threading

from cardring.engine.winner_gate import WinnerGate


def test_first_claim_wins():
    gate = WinnerGate()
    assert not gate.ended
    assert gate.winner is None

    assert gate.try_claim(3)
    assert not gate.try_claim(1)

    assert gate.ended
    assert gate.winner == 3
    assert gate.wait(timeout=0)


def test_wait_times_out_while_open():
    assert WinnerGate().wait(timeout=0.01) is False


def test_racing_claims_have_one_winner():
    gate = WinnerGate()
    barrier = threading.Barrier(8)
    results = {}

    def claim(actor_id):
        barrier.wait()
        results[actor_id] = gate.try_claim(actor_id)

    threads = [threading.Thread(target=claim, args=(i,)) for i in range(1, 9)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    winners = [a for a, won in results.items() if won]
    assert len(winners) == 1
    assert gate.winner == winners[0]
