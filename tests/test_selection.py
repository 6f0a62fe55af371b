import asyncio
import random

import pytest

from tipjar.engine.models import TipSpec
from tipjar.engine.selection import CandidatePool, select


def tips(*ids):
    return [TipSpec(id=tip_id, text=tip_id) for tip_id in ids]


def test_draw_from_empty_pool_raises():
    with pytest.raises(IndexError):
        CandidatePool([]).draw()


def test_pool_copies_catalogue():
    catalogue = tips("a", "b")
    pool = CandidatePool(catalogue)
    pool.discard(0)
    assert len(catalogue) == 2
    assert pool.ids() == ["b"]


def test_select_returns_first_eligible_and_keeps_it():
    pool = CandidatePool(tips("a", "b", "c"), random.Random(3))

    async def judge(tip):
        return tip.id == "b"

    chosen = asyncio.run(select(pool, judge))
    assert chosen.id == "b"
    assert "b" in pool.ids()


def test_select_discards_each_ineligible_tip_once():
    pool = CandidatePool(tips(*"abcdefgh"), random.Random(7))
    evaluated = []

    async def judge(tip):
        evaluated.append(tip.id)
        return False

    assert asyncio.run(select(pool, judge)) is None
    assert sorted(evaluated) == list("abcdefgh")
    assert len(pool) == 0
    assert not pool


def test_select_handles_large_pools_without_recursion():
    pool = CandidatePool([TipSpec(id=str(i), text="x") for i in range(5000)], random.Random(1))

    async def judge(tip):
        return False

    assert asyncio.run(select(pool, judge)) is None


def test_errors_from_judge_propagate_and_keep_candidate():
    pool = CandidatePool(tips("a"))

    async def judge(tip):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        asyncio.run(select(pool, judge))
    assert pool.ids() == ["a"]


def test_draw_is_roughly_uniform():
    pool = CandidatePool(tips("a", "b", "c"), random.Random(42))
    counts = {"a": 0, "b": 0, "c": 0}
    for _ in range(3000):
        counts[pool.draw()[1].id] += 1
    assert all(800 < count < 1200 for count in counts.values())
