"""Link editor state machine.

Holds an uncommitted draft while a link is being added or edited::

    CLOSED -> CREATING -> SUBMITTING -> CLOSED
    CLOSED -> EDITING(link) -> SUBMITTING -> CLOSED
    CREATING/EDITING -> CLOSED (cancel)

Field edits only touch the draft. Nothing reaches the store until ``submit``
passes validation, and then exactly one ``save`` call is made.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, fields, replace
from enum import StrEnum
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import AppException, EditorStateError, TypeLockedError
from domain.entities.link import (
    Currency,
    GradientStyle,
    Link,
    LinkCategory,
    LinkKind,
    normalize_price,
    validate_link,
)
from domain.entities.validation import FieldError

logger = structlog.get_logger()


class EditorState(StrEnum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"
    SUBMITTING = "submitting"


@dataclass
class LinkDraft:
    """In-memory edit state for one link."""

    profile_id: UUID
    id: UUID | None = None
    title: str = ""
    url: str = ""
    type: Any = LinkKind.LINK
    link_type: Any = LinkCategory.WEBSITE
    price: Any = None
    currency: Any = Currency.USD
    image_url: str | None = None
    gradient_style: Any = GradientStyle.NONE
    is_active: bool = True
    position: int | None = None

    @classmethod
    def from_link(cls, link: Link) -> "LinkDraft":
        return cls(
            profile_id=link.profile_id,
            id=link.id,
            title=link.title,
            url=link.url,
            type=link.type,
            link_type=link.link_type,
            price=link.price,
            currency=link.currency,
            image_url=link.image_url,
            gradient_style=link.gradient_style,
            is_active=link.is_active,
            position=link.position,
        )

    @property
    def is_new(self) -> bool:
        return self.id is None

    def as_fields(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def normalized(self) -> "LinkDraft":
        """Canonical copy ready to persist.

        Product-only fields are dropped from plain links, enums are coerced
        and the price is rounded to cents. Assumes the draft validated.
        """
        kind = LinkKind(self.type)
        if kind == LinkKind.PRODUCT:
            price = normalize_price(self.price) if self.price is not None else None
            currency = Currency(self.currency) if self.currency else Currency.USD
        else:
            price = None
            currency = None

        return replace(
            self,
            title=str(self.title).strip(),
            url=str(self.url).strip(),
            type=kind,
            link_type=(
                LinkCategory.parse(self.link_type) if self.link_type else LinkCategory.WEBSITE
            ),
            price=price,
            currency=currency,
            gradient_style=GradientStyle.parse(self.gradient_style),
            is_active=bool(self.is_active),
        )


EDITABLE_FIELDS = frozenset(
    {
        "title",
        "url",
        "type",
        "link_type",
        "price",
        "currency",
        "image_url",
        "gradient_style",
        "is_active",
    }
)

SaveFn = Callable[[LinkDraft], Awaitable[Link]]


class LinkEditor:
    """Create/edit dialog for a single link."""

    def __init__(self) -> None:
        self.state = EditorState.CLOSED
        self.draft: LinkDraft | None = None
        self.errors: list[FieldError] = []
        self.last_error: str | None = None
        self._open_state: EditorState | None = None

    @property
    def is_open(self) -> bool:
        return self.state in (EditorState.CREATING, EditorState.EDITING)

    def _require(self, operation: str, *allowed: EditorState) -> None:
        if self.state not in allowed:
            raise EditorStateError(operation, self.state.value)

    def _open_draft(self, operation: str) -> LinkDraft:
        self._require(operation, EditorState.CREATING, EditorState.EDITING)
        if self.draft is None:
            raise EditorStateError(operation, self.state.value)
        return self.draft

    def open_create(self, profile_id: UUID) -> LinkDraft:
        """Start a new link with default values."""
        self._require("open", EditorState.CLOSED)
        self.draft = LinkDraft(profile_id=profile_id)
        self._enter(EditorState.CREATING)
        return self.draft

    def open_edit(self, link: Link) -> LinkDraft:
        """Start editing a copy of an existing link. Its type is locked."""
        self._require("open", EditorState.CLOSED)
        self.draft = LinkDraft.from_link(link)
        self._enter(EditorState.EDITING)
        return self.draft

    def change(self, **changes: Any) -> LinkDraft:
        """Apply field edits to the draft."""
        current = self._open_draft("change")

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")

        if (
            self.state == EditorState.EDITING
            and "type" in changes
            and changes["type"] != current.type
        ):
            raise TypeLockedError()

        self.draft = replace(current, **changes)
        return self.draft

    async def submit(self, save: SaveFn) -> Link | None:
        """Validate the draft and hand it to ``save``.

        Returns the saved link, or None when validation failed; the field
        errors are then in ``errors`` and the editor stays open. An
        application error from ``save`` (usually StoreError) is logged, kept
        in ``last_error`` and re-raised with the draft still open so nothing
        the user typed is lost.
        """
        current = self._open_draft("submit")

        self.errors = validate_link(current.as_fields())
        if self.errors:
            return None

        draft = current.normalized()
        self.last_error = None
        self.state = EditorState.SUBMITTING
        try:
            saved = await save(draft)
        except AppException as exc:
            logger.warning(
                "link_save_failed",
                link_id=str(draft.id) if draft.id else None,
                profile_id=str(draft.profile_id),
                error=exc.message,
            )
            self.last_error = exc.message
            self.state = self._open_state or EditorState.CLOSED
            raise

        self._close()
        return saved

    def cancel(self) -> None:
        """Discard the draft."""
        self._require("cancel", EditorState.CREATING, EditorState.EDITING, EditorState.CLOSED)
        self._close()

    def _enter(self, state: EditorState) -> None:
        self.state = state
        self._open_state = state
        self.errors = []
        self.last_error = None

    def _close(self) -> None:
        self.state = EditorState.CLOSED
        self._open_state = None
        self.draft = None
        self.errors = []
