import io
import re
import threading
import time

from dining.args import Settings
from dining.table import Philosopher, Table, now_ms


def make_table(count=3, out=None):
    settings = Settings(count, 800, 200, 200, None)
    return Table(settings, out if out is not None else io.StringIO())


def test_now_ms_tracks_wall_clock():
    before = time.time() * 1000
    value = now_ms()
    after = time.time() * 1000
    assert before - 1 <= value <= after + 1


def test_table_seats_philosophers_with_neighbouring_forks():
    table = make_table(4)
    assert len(table.forks) == 4
    assert [p.index for p in table.philosophers] == [0, 1, 2, 3]
    assert [p.number for p in table.philosophers] == [1, 2, 3, 4]
    assert [(p.left_fork, p.right_fork) for p in table.philosophers] == [
        (0, 1),
        (1, 2),
        (2, 3),
        (3, 0),
    ]


def test_single_philosopher_has_both_sides_on_one_fork():
    table = make_table(1)
    philosopher = table.philosophers[0]
    assert philosopher.left_fork == philosopher.right_fork == 0


def test_philosophers_start_fed_at_start_time():
    table = make_table(3)
    for philosopher in table.philosophers:
        assert philosopher.snapshot() == (table.start_time, 0)


def test_mark_meal_updates_last_meal():
    philosopher = Philosopher(index=0, left_fork=0, right_fork=1, last_meal=0)
    before = now_ms()
    philosopher.mark_meal()
    last_meal, meals = philosopher.snapshot()
    assert last_meal >= before
    assert meals == 0


def test_finish_meal_counts_up():
    philosopher = Philosopher(index=2, left_fork=2, right_fork=0, last_meal=0)
    assert [philosopher.finish_meal() for _ in range(3)] == [1, 2, 3]
    assert philosopher.snapshot()[1] == 3


def test_finish_meal_is_thread_safe():
    philosopher = Philosopher(index=0, left_fork=0, right_fork=1, last_meal=0)

    def work():
        for _ in range(500):
            philosopher.finish_meal()

    threads = [threading.Thread(target=work) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert philosopher.snapshot()[1] == 2000


def test_log_writes_timestamp_id_and_status():
    out = io.StringIO()
    table = make_table(out=out)
    assert table.log(3, "is eating") is True
    match = re.fullmatch(r"(\d+) 3 is eating\n", out.getvalue())
    assert match is not None
    assert int(match.group(1)) >= 0


def test_log_after_stop_prints_only_death():
    out = io.StringIO()
    table = make_table(out=out)
    table.log(1, "is thinking")
    assert table.is_stopped() is False
    table.stop()
    assert table.is_stopped() is True
    assert table.log(2, "is sleeping") is False
    assert table.log(2, "died") is True
    lines = out.getvalue().splitlines()
    assert [line.split(" ", 1)[1] for line in lines] == ["1 is thinking", "2 died"]


def test_sleep_waits_at_least_duration():
    table = make_table()
    start = now_ms()
    table.sleep(30)
    assert now_ms() - start >= 30


def test_sleep_returns_at_once_when_stopped():
    table = make_table()
    table.stop()
    assert table.is_stopped() is True
    start = now_ms()
    table.sleep(5000)
    elapsed = now_ms() - start
    assert elapsed < 1000
    assert table.is_stopped() is True


def test_stop_wakes_a_sleeping_thread():
    table = make_table()
    done = threading.Event()
    elapsed = []

    def sleeper():
        start = now_ms()
        table.sleep(10_000)
        elapsed.append(now_ms() - start)
        done.set()

    thread = threading.Thread(target=sleeper)
    thread.start()
    time.sleep(0.05)
    assert table.is_stopped() is False
    table.stop()
    thread.join(timeout=2)
    assert done.is_set()
    assert table.is_stopped() is True
    assert len(elapsed) == 1
    assert elapsed[0] < 2000