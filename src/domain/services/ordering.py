"""Ordering rules for a profile's links.

Render order is ascending ``position`` with ties broken by the id string, so
two readers of the same rows always agree on the order. Deletes leave gaps
that are tolerated until the next reorder renumbers the set to ``0..n-1``.
"""

from collections.abc import Iterable, Sequence
from uuid import UUID

from core.exceptions import LinkNotFoundError, ReorderMismatchError
from domain.entities.link import Link, PositionChange


def sort_links(links: Iterable[Link]) -> list[Link]:
    """Return links in render order."""
    return sorted(links, key=lambda link: (link.position, str(link.id)))


def public_listing(links: Iterable[Link]) -> list[Link]:
    """Links visible on the public page."""
    return [link for link in sort_links(links) if link.is_active]


def editor_listing(links: Iterable[Link]) -> list[Link]:
    """Every link, inactive ones included, for the dashboard."""
    return sort_links(links)


def next_position(links: Sequence[Link]) -> int:
    """Position for a link appended to the end of the list.

    This is the current count, unless a delete left a gap and the count is
    already in use, in which case it is one past the highest position.
    """
    count = len(links)
    taken = {link.position for link in links}
    if count not in taken:
        return count
    return max(taken) + 1


def _renumber(ordered: Sequence[Link]) -> list[PositionChange]:
    changes = []
    for index, link in enumerate(ordered):
        if link.position != index:
            changes.append(
                PositionChange(link_id=link.id, old_position=link.position, new_position=index)
            )
    return changes


def reorder(links: Sequence[Link], link_id: UUID, new_index: int) -> list[PositionChange]:
    """Move one link to ``new_index`` in render order.

    The whole set ends up numbered ``0..n-1``. Only links whose position
    actually changes are returned, so a move between neighbours in a gapless
    list touches just the items between the old and new index.
    """
    ordered = sort_links(links)
    current = next((i for i, link in enumerate(ordered) if link.id == link_id), None)
    if current is None:
        raise LinkNotFoundError(str(link_id))

    target = max(0, min(new_index, len(ordered) - 1))
    moved = ordered.pop(current)
    ordered.insert(target, moved)
    return _renumber(ordered)


def apply_order(links: Sequence[Link], ordered_ids: Sequence[UUID]) -> list[PositionChange]:
    """Set positions from a complete ordering of link ids.

    ``ordered_ids`` must name every current link exactly once.
    """
    by_id = {link.id: link for link in links}
    seen: set[UUID] = set()
    duplicates = []
    for link_id in ordered_ids:
        if link_id in seen:
            duplicates.append(str(link_id))
        seen.add(link_id)

    missing = sorted(str(link_id) for link_id in by_id.keys() - seen)
    unexpected = sorted(str(link_id) for link_id in seen - by_id.keys()) + duplicates
    if missing or unexpected:
        raise ReorderMismatchError(missing=missing, unexpected=unexpected)

    return _renumber([by_id[link_id] for link_id in ordered_ids])


def apply_changes(links: Iterable[Link], changes: Iterable[PositionChange]) -> list[Link]:
    """Apply position changes in memory and return the links in render order."""
    new_positions = {change.link_id: change.new_position for change in changes}
    updated = []
    for link in links:
        if link.id in new_positions:
            link.position = new_positions[link.id]
        updated.append(link)
    return sort_links(updated)
