"""Unit tests for the link ordering rules."""

import random
from uuid import UUID, uuid4

import pytest

from core.exceptions import LinkNotFoundError, ReorderMismatchError
from domain.services.ordering import (
    apply_changes,
    apply_order,
    editor_listing,
    next_position,
    public_listing,
    reorder,
    sort_links,
)


@pytest.fixture
def profile_id() -> UUID:
    return uuid4()


@pytest.fixture
def five(make_link, profile_id):
    return [make_link(profile_id, i, title=f"L{i}") for i in range(5)]


def _titles(links) -> list[str]:
    return [link.title for link in links]


class TestSortLinks:
    def test_sorted_by_position(self, make_link, profile_id):
        links = [make_link(profile_id, p) for p in (3, 0, 2)]
        assert [link.position for link in sort_links(links)] == [0, 2, 3]

    def test_ties_broken_by_id(self, make_link, profile_id):
        a = make_link(profile_id, 1, id=UUID("00000000-0000-0000-0000-00000000000a"))
        b = make_link(profile_id, 1, id=UUID("00000000-0000-0000-0000-00000000000b"))

        assert sort_links([b, a]) == [a, b]
        assert sort_links([a, b]) == [a, b]

    def test_public_listing_hides_inactive(self, five):
        five[1].is_active = False
        five[3].is_active = False

        assert _titles(public_listing(five)) == ["L0", "L2", "L4"]
        assert len(editor_listing(five)) == 5


class TestNextPosition:
    def test_empty_list(self):
        assert next_position([]) == 0

    def test_appends_at_count(self, five):
        assert next_position(five) == 5

    def test_gap_from_delete_still_appends_last(self, make_link, profile_id):
        # 0, 1, 3 after deleting position 2: the count (3) is taken
        links = [make_link(profile_id, p) for p in (0, 1, 3)]
        assert next_position(links) == 4


class TestReorder:
    def test_move_down(self, five):
        changes = reorder(five, five[0].id, 2)

        assert _titles(apply_changes(five, changes)) == ["L1", "L2", "L0", "L3", "L4"]
        # Only the three items between the old and new index move
        assert len(changes) == 3

    def test_move_up(self, five):
        changes = reorder(five, five[4].id, 1)

        assert _titles(apply_changes(five, changes)) == ["L0", "L4", "L1", "L2", "L3"]

    def test_result_is_contiguous(self, five):
        result = apply_changes(five, reorder(five, five[2].id, 4))
        assert [link.position for link in result] == [0, 1, 2, 3, 4]

    def test_same_index_is_a_no_op(self, five):
        assert reorder(five, five[2].id, 2) == []

    def test_index_past_end_is_clamped(self, five):
        result = apply_changes(five, reorder(five, five[0].id, 99))
        assert _titles(result)[-1] == "L0"

    def test_closes_gaps(self, make_link, profile_id):
        links = [make_link(profile_id, p, title=f"P{p}") for p in (0, 2, 5)]

        result = apply_changes(links, reorder(links, links[2].id, 0))

        assert _titles(result) == ["P5", "P0", "P2"]
        assert [link.position for link in result] == [0, 1, 2]

    def test_unknown_link(self, five):
        with pytest.raises(LinkNotFoundError):
            reorder(five, uuid4(), 0)

    def test_delete_preserves_relative_order(self, five):
        remaining = [link for link in five if link.title != "L2"]

        assert _titles(sort_links(remaining)) == ["L0", "L1", "L3", "L4"]


class TestApplyOrder:
    def test_full_permutation(self, five):
        ids = [five[i].id for i in (4, 3, 2, 1, 0)]

        result = apply_changes(five, apply_order(five, ids))

        assert _titles(result) == ["L4", "L3", "L2", "L1", "L0"]
        assert [link.position for link in result] == [0, 1, 2, 3, 4]

    def test_missing_id_rejected(self, five):
        with pytest.raises(ReorderMismatchError) as exc_info:
            apply_order(five, [link.id for link in five[:4]])

        assert exc_info.value.details["missing"] == [str(five[4].id)]

    def test_unknown_id_rejected(self, five):
        stranger = uuid4()
        with pytest.raises(ReorderMismatchError) as exc_info:
            apply_order(five, [link.id for link in five] + [stranger])

        assert exc_info.value.details["unexpected"] == [str(stranger)]

    def test_duplicate_id_rejected(self, five):
        ids = [link.id for link in five] + [five[0].id]
        with pytest.raises(ReorderMismatchError):
            apply_order(five, ids)


class TestSequences:
    @staticmethod
    def _assert_contiguous(links) -> None:
        assert sorted(link.position for link in links) == list(range(len(links)))

    def test_appends_and_reorders_stay_contiguous(self, make_link, profile_id):
        links = []
        for step in range(3):
            links.append(make_link(profile_id, next_position(links), title=f"A{step}"))
            self._assert_contiguous(links)

        links = apply_changes(links, reorder(links, links[0].id, 2))
        self._assert_contiguous(links)

        links.append(make_link(profile_id, next_position(links), title="A3"))
        self._assert_contiguous(links)

        reversed_ids = [link.id for link in reversed(links)]
        links = apply_changes(links, apply_order(links, reversed_ids))
        self._assert_contiguous(links)
        assert [link.id for link in links] == reversed_ids

        links = apply_changes(links, reorder(links, links[-1].id, 0))
        links.append(make_link(profile_id, next_position(links), title="A4"))
        links = apply_changes(links, reorder(links, links[2].id, 10))
        self._assert_contiguous(links)
        assert links[-1].position == len(links) - 1

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_random_sequence_stays_contiguous(self, make_link, profile_id, seed):
        rng = random.Random(seed)
        links = []
        for step in range(40):
            operation = rng.choice(["append", "move", "order"]) if links else "append"
            if operation == "append":
                links.append(make_link(profile_id, next_position(links), title=f"S{step}"))
                links = sort_links(links)
            elif operation == "move":
                target = rng.choice(links)
                links = apply_changes(links, reorder(links, target.id, rng.randrange(len(links) + 2)))
            else:
                ids = [link.id for link in links]
                rng.shuffle(ids)
                links = apply_changes(links, apply_order(links, ids))
                assert [link.id for link in links] == ids

            self._assert_contiguous(links)
