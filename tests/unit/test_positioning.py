"""Unit tests for gap-based sibling ordering."""

from datetime import datetime
from uuid import uuid7

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.kanban.core.exceptions import NotFoundError, ValidationFailedError
from src.kanban.services.positioning import PositionAllocator
from tests.factories import CardFactory

pytestmark = pytest.mark.unit

NOW = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture
def allocator() -> PositionAllocator:
    return PositionAllocator(gap=1000)


def ordered(cards):
    return [c.id for c in sorted(cards, key=lambda c: (c.position, c.id))]


class TestAppendPosition:
    def test_empty_parent_starts_at_gap(self, allocator):
        assert allocator.append_position([]) == 1000
        assert allocator.append_position([None]) == 1000

    def test_appends_after_highest(self, allocator):
        assert allocator.append_position([3000, 1000, 2000]) == 4000

    def test_gap_below_two_rejected(self):
        with pytest.raises(ValueError):
            PositionAllocator(gap=1)


class TestAnchorValidation:
    def test_no_anchor_rejected(self, allocator):
        card = CardFactory.build()
        with pytest.raises(ValidationFailedError):
            allocator.reorder([card], card, None, None, NOW)

    def test_self_anchor_rejected(self, allocator):
        card = CardFactory.build()
        with pytest.raises(ValidationFailedError):
            allocator.reorder([card], card, card.id, None, NOW)

    def test_identical_anchors_rejected(self, allocator):
        a, b = CardFactory.at_positions([1000, 2000])
        with pytest.raises(ValidationFailedError):
            allocator.reorder([a, b], a, b.id, b.id, NOW)

    def test_unknown_anchor_not_found(self, allocator):
        a, b = CardFactory.at_positions([1000, 2000])
        with pytest.raises(NotFoundError):
            allocator.reorder([a, b], a, uuid7(), None, NOW)

    def test_anchors_out_of_order_rejected(self, allocator):
        a, b, c = CardFactory.at_positions([1000, 2000, 3000])
        with pytest.raises(ValidationFailedError):
            allocator.reorder([a, b, c], a, c.id, b.id, NOW)


class TestReorder:
    def test_single_sibling_only_touches_timestamp(self, allocator):
        card = CardFactory.build(position=5000)
        placement = allocator.reorder([card], card, uuid7(), None, NOW)

        assert placement.position == 5000
        assert card.updated_at == NOW
        assert not placement.did_renumber

    def test_midpoint_between_anchors(self, allocator):
        """Moving C between A and B lands on the midpoint; nothing else moves."""
        a, b, c = CardFactory.at_positions([1000, 2000, 3000])

        placement = allocator.reorder([a, b, c], c, a.id, b.id, NOW)

        assert c.position == 1500
        assert (a.position, b.position) == (1000, 2000)
        assert not placement.did_renumber
        assert ordered([a, b, c]) == [a.id, c.id, b.id]

    def test_adjacent_anchors_trigger_renumber(self, allocator):
        """No integer fits between 1000 and 1001, so all three are respaced."""
        a, b, c = CardFactory.at_positions([1000, 1001, 5000])

        placement = allocator.reorder([a, b, c], c, a.id, b.id, NOW)

        assert placement.did_renumber
        assert [a.position, c.position, b.position] == [1000, 2000, 3000]
        assert all(card.updated_at == NOW for card in (a, b, c))

    def test_only_after_anchor_moves_to_front(self, allocator):
        a, b, c = CardFactory.at_positions([1000, 2000, 3000])

        allocator.reorder([a, b, c], c, None, a.id, NOW)

        assert ordered([a, b, c]) == [c.id, a.id, b.id]
        assert c.position == 0

    def test_only_before_anchor_moves_to_end(self, allocator):
        a, b, c = CardFactory.at_positions([1000, 2000, 3000])

        allocator.reorder([a, b, c], a, c.id, None, NOW)

        assert a.position == 4000
        assert ordered([a, b, c]) == [b.id, c.id, a.id]

    def test_only_before_anchor_in_middle_lands_right_after_it(self, allocator):
        a, b, c, d = CardFactory.at_positions([1000, 2000, 3000, 4000])

        allocator.reorder([a, b, c, d], d, a.id, None, NOW)

        assert ordered([a, b, c, d]) == [a.id, d.id, b.id, c.id]

    def test_only_before_anchor_uses_midpoint_to_next_sibling(self, allocator):
        a, b, c = CardFactory.at_positions([1000, 1500, 2000])

        placement = allocator.reorder([a, b, c], a, b.id, None, NOW)

        assert ordered([a, b, c]) == [b.id, a.id, c.id]
        assert a.position == 1750
        assert not placement.did_renumber


class TestPlaceAtIndex:
    def test_empty_target_gets_gap(self, allocator):
        card = CardFactory.build(position=7000)

        allocator.place_at_index([], card, 3, NOW)

        assert card.position == 1000

    def test_index_clamped_to_end(self, allocator):
        a, b = CardFactory.at_positions([1000, 2000])
        moving = CardFactory.build(position=9999)

        allocator.place_at_index([a, b], moving, 10, NOW)

        assert ordered([a, b, moving]) == [a.id, b.id, moving.id]

    def test_insert_at_front(self, allocator):
        a, b = CardFactory.at_positions([1000, 2000])
        moving = CardFactory.build(position=9999)

        allocator.place_at_index([a, b], moving, 0, NOW)

        assert ordered([a, b, moving]) == [moving.id, a.id, b.id]


def _anchor_cases():
    """Sibling count, moving index and a target slot among the others."""
    return st.integers(min_value=2, max_value=12).flatmap(
        lambda n: st.tuples(
            st.just(n),
            st.integers(min_value=0, max_value=n - 1),
            st.integers(min_value=0, max_value=n - 1),
            st.lists(st.integers(min_value=-5000, max_value=5000), min_size=n, max_size=n, unique=True),
        )
    )


@given(case=_anchor_cases())
@settings(max_examples=200)
def test_reorder_preserves_relative_order_of_others(case):
    """Whatever the start positions, the moved card lands in its slot and others keep order."""
    n, moving_index, slot, positions = case
    allocator = PositionAllocator(gap=1000)
    cards = sorted(CardFactory.at_positions(sorted(positions)), key=lambda c: (c.position, c.id))
    moving = cards[moving_index]
    others = [c for c in cards if c.id != moving.id]

    slot = min(slot, len(others))
    before_id = others[slot - 1].id if slot > 0 else None
    after_id = others[slot].id if slot < len(others) else None

    allocator.reorder(cards, moving, before_id, after_id, NOW)

    expected = [c.id for c in others]
    expected.insert(slot, moving.id)
    assert ordered(cards) == expected
    assert len({c.position for c in cards}) == n


@given(positions=st.lists(st.integers(min_value=0, max_value=10), min_size=2, max_size=10))
def test_renumber_produces_uniform_gap(positions):
    allocator = PositionAllocator(gap=1000)
    cards = CardFactory.at_positions(positions)

    allocator.renumber(cards, NOW)

    assert [c.position for c in cards] == [(i + 1) * 1000 for i in range(len(cards))]


@given(
    gap=st.sampled_from([2, 3, 1000]),
    count=st.integers(min_value=2, max_value=8),
    moves=st.lists(
        st.tuples(
            st.integers(min_value=0, max_value=99),
            st.integers(min_value=0, max_value=99),
            st.booleans(),
        ),
        max_size=60,
    ),
)
@settings(max_examples=150)
def test_single_anchor_move_sequences_keep_order_and_unique_positions(gap, count, moves):
    """Repeated single-anchor moves never misorder siblings or collide positions."""
    allocator = PositionAllocator(gap=gap)
    cards = CardFactory.at_positions([(i + 1) * gap for i in range(count)])

    for moving_pick, slot_pick, use_before in moves:
        current = sorted(cards, key=lambda c: (c.position, c.id))
        moving = current[moving_pick % count]
        others = [c for c in current if c.id != moving.id]

        if use_before:
            slot = 1 + slot_pick % len(others)
            allocator.reorder(current, moving, others[slot - 1].id, None, NOW)
        else:
            slot = slot_pick % len(others)
            allocator.reorder(current, moving, None, others[slot].id, NOW)

        expected = [c.id for c in others]
        expected.insert(slot, moving.id)
        assert ordered(cards) == expected
        assert len({c.position for c in cards}) == count
