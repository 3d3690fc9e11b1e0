import pytest

from asciiman.rng import LCG


def test_same_seed_same_stream():
    a, b = LCG(42), LCG(42)
    assert [a.next() for _ in range(20)] == [b.next() for _ in range(20)]


def test_randint_is_inclusive_and_in_range():
    rng = LCG(1)
    values = {rng.randint(2, 4) for _ in range(500)}
    assert values == {2, 3, 4}


def test_choice_on_empty_sequence_raises():
    with pytest.raises(IndexError):
        LCG(1).choice([])


def test_shuffled_keeps_elements_and_leaves_input_alone():
    items = list(range(10))
    out = LCG(5).shuffled(items)
    assert sorted(out) == items
    assert items == list(range(10))


def test_fork_is_deterministic():
    assert LCG(9).fork().next() == LCG(9).fork().next()


def test_seed_is_masked_to_32_bits():
    assert LCG(2**32 + 7).seed == 7
