from __future__ import annotations

import random
from typing import List

import pytest

from edlin_engine.buffer import LineStore
from edlin_engine.errors import CommandSyntaxError, InvalidArgumentError, LineRangeError


def make_store(count: int = 10) -> LineStore[str]:
    return LineStore(f"line{i}" for i in range(count))


def test_append_and_index_access() -> None:
    store = LineStore[str]()
    store.append("a")
    store.append("b")

    assert len(store) == 2
    assert store.get(1) == "b"
    assert store[0] == "a"
    assert list(store) == ["a", "b"]


def test_none_is_rejected() -> None:
    store = make_store(2)

    with pytest.raises(InvalidArgumentError):
        store.append(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        store.insert(0, None)  # type: ignore[arg-type]
    assert len(store) == 2


def test_insert_clamps_past_end() -> None:
    store = make_store(3)

    landed = store.insert(99, "tail")

    assert landed == 3
    assert store.snapshot()[-1] == "tail"


def test_insert_negative_position_is_range_error() -> None:
    store = make_store(3)

    with pytest.raises(LineRangeError):
        store.insert(-1, "x")


def test_insert_many_splices_block() -> None:
    store = make_store(3)

    count = store.insert_many(1, ["x", "y"])

    assert count == 2
    assert store.snapshot() == ("line0", "x", "y", "line1", "line2")


def test_delete_closes_gap_and_calls_callback() -> None:
    removed: List[str] = []
    store = LineStore([f"l{i}" for i in range(5)], on_remove=removed.append)

    count = store.delete(1, 3)

    assert count == 3
    assert store.snapshot() == ("l0", "l4")
    assert removed == ["l1", "l2", "l3"]


def test_delete_clamps_end() -> None:
    store = make_store(5)

    assert store.delete(3, 100) == 2
    assert len(store) == 3


def test_delete_errors_leave_store_untouched() -> None:
    store = make_store(5)

    with pytest.raises(LineRangeError):
        store.delete(5, 6)
    with pytest.raises(CommandSyntaxError):
        store.delete(3, 1)
    assert len(store) == 5


def test_move_block_forward() -> None:
    store = LineStore(list("abcdefgh"))

    landed = store.move(1, 2, 5)

    assert landed == 5
    assert "".join(store) == "adefgbch"


def test_move_block_backward() -> None:
    store = LineStore(list("abcdefgh"))

    landed = store.move(5, 6, 1)

    assert landed == 1
    assert "".join(store) == "afgbcdeh"


def test_move_clamps_to_true_end() -> None:
    store = LineStore(list("abcdef"))

    landed = store.move(0, 1, 10)

    assert landed == 4
    assert "".join(store) == "cdefab"


def test_move_in_place_is_noop() -> None:
    store = LineStore(list("abcdef"))

    assert store.move(2, 3, 2) == 2
    assert "".join(store) == "abcdef"


def test_move_out_of_range_is_rejected() -> None:
    store = LineStore(list("abc"))

    with pytest.raises(LineRangeError):
        store.move(1, 5, 0)
    assert "".join(store) == "abc"


def test_move_then_move_back_restores_order() -> None:
    original = [f"l{i}" for i in range(12)]
    store = LineStore(original)
    start, end, target = 1, 3, 7

    landed = store.move(start, end, target)
    store.move(landed, landed + (end - start), start)

    assert list(store) == original


def test_random_operations_keep_indices_dense() -> None:
    rng = random.Random(1234)
    store = make_store(20)
    mirror = list(store)

    for step in range(300):
        op = rng.choice(("insert", "delete", "move"))
        size = len(mirror)
        if op == "insert" or size < 3:
            pos = rng.randint(0, size + 2)
            item = f"n{step}"
            store.insert(pos, item)
            mirror.insert(min(pos, size), item)
        elif op == "delete":
            start = rng.randint(0, size - 1)
            end = rng.randint(start, size + 1)
            store.delete(start, end)
            del mirror[start : min(end, size - 1) + 1]
        else:
            start = rng.randint(0, size - 1)
            end = rng.randint(start, size - 1)
            target = rng.randint(0, size - 1)
            landed = store.move(start, end, target)
            block = mirror[start : end + 1]
            rest = mirror[:start] + mirror[end + 1 :]
            rest[landed:landed] = block
            mirror = rest

        assert len(store) == len(mirror)
        assert list(store) == mirror
        assert [store.get(i) for i in range(len(store))] == mirror
