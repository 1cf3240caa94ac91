"""Link API routes (dashboard)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_link_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.link import (
    LinkActiveUpdate,
    LinkCreate,
    LinkDetailResponse,
    LinkListResponse,
    LinkMove,
    LinkOrder,
    LinkResponse,
    LinkUpdate,
    PresentationResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.link import Link
from domain.services.link_service import LinkService
from domain.services.presentation import select_presentation

router = APIRouter(prefix="/links", tags=["links"])


@router.get(
    "",
    response_model=LinkListResponse,
    summary="List links",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_links(
    request: Request,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
    active_only: bool = Query(False, description="Only links shown on the public page"),
) -> LinkListResponse:
    """
    Get the caller's links in display order.

    Inactive links are included (and marked `dimmed`) unless `active_only` is set.
    """
    links = await service.list_links(user.id, active_only=active_only)
    return build_link_list_response(links)


@router.post(
    "",
    response_model=LinkDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a link or product",
    responses={
        201: {"description": "Link appended to the end of the list"},
        400: {"model": ErrorResponse, "description": "Field validation failed"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_link(
    request: Request,
    body: LinkCreate,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
) -> LinkDetailResponse:
    """Append a new link. Price and currency are dropped unless `type` is `product`."""
    link = await service.create_link(user.id, body.model_dump())
    return LinkDetailResponse(data=build_link_response(link))


@router.put(
    "/order",
    response_model=LinkListResponse,
    summary="Commit a complete order",
    responses={
        200: {"description": "Links renumbered 0..n-1 in the given order"},
        400: {
            "model": ErrorResponse,
            "description": "Order does not list every link exactly once",
        },
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reorder_links(
    request: Request,
    body: LinkOrder,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
) -> LinkListResponse:
    """Set every link's position from a full list of ids."""
    links = await service.reorder_links(user.id, body.link_ids)
    return build_link_list_response(links)


@router.get(
    "/{link_id}",
    response_model=LinkDetailResponse,
    summary="Get a link",
    responses={404: {"model": ErrorResponse, "description": "Link not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_link(
    request: Request,
    link_id: UUID,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
) -> LinkDetailResponse:
    """Get one of the caller's links."""
    link = await service.get_link(user.id, link_id)
    return LinkDetailResponse(data=build_link_response(link))


@router.patch(
    "/{link_id}",
    response_model=LinkDetailResponse,
    summary="Edit a link",
    responses={
        200: {"description": "Link updated in place"},
        400: {
            "model": ErrorResponse,
            "description": "Field validation failed or type change attempted",
        },
        404: {"model": ErrorResponse, "description": "Link not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_link(
    request: Request,
    link_id: UUID,
    body: LinkUpdate,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
) -> LinkDetailResponse:
    """Edit a link. Its position is kept and its type cannot change."""
    link = await service.update_link(user.id, link_id, body.model_dump(exclude_unset=True))
    return LinkDetailResponse(data=build_link_response(link))


@router.delete(
    "/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a link",
    responses={
        204: {"description": "Link deleted"},
        404: {"model": ErrorResponse, "description": "Link not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_link(
    request: Request,
    link_id: UUID,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
) -> None:
    """Delete a link. Positions of the remaining links are not renumbered."""
    await service.delete_link(user.id, link_id)
    return None


@router.put(
    "/{link_id}/active",
    response_model=LinkListResponse,
    summary="Show or hide a link",
    responses={404: {"model": ErrorResponse, "description": "Link not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def set_link_active(
    request: Request,
    link_id: UUID,
    body: LinkActiveUpdate,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
) -> LinkListResponse:
    """Toggle public visibility and return the refreshed list."""
    links = await service.set_active(user.id, link_id, body.is_active)
    return build_link_list_response(links)


@router.post(
    "/{link_id}/move",
    response_model=LinkListResponse,
    summary="Drag a link to a new index",
    responses={404: {"model": ErrorResponse, "description": "Link not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def move_link(
    request: Request,
    link_id: UUID,
    body: LinkMove,
    user: CurrentUser,
    service: LinkService = Depends(get_link_service),
) -> LinkListResponse:
    """Move a link; indexes past the end place it last."""
    links = await service.move_link(user.id, link_id, body.index)
    return build_link_list_response(links)


def build_presentation(link: Link) -> PresentationResponse:
    presentation = select_presentation(link)
    return PresentationResponse(
        icon=presentation.icon.value,
        color_treatment=presentation.color_treatment.value,
        price_label=presentation.price_label,
        dimmed=presentation.dimmed,
    )


def build_link_response(link: Link) -> LinkResponse:
    """Convert domain entity to response schema with its presentation."""
    return LinkResponse(
        id=link.id,
        profile_id=link.profile_id,
        title=link.title,
        url=link.url,
        type=link.type,
        link_type=link.link_type,
        price=link.price,
        currency=link.currency,
        image_url=link.image_url,
        gradient_style=link.gradient_style,
        position=link.position,
        is_active=link.is_active,
        clicks=link.clicks,
        created_at=link.created_at,
        updated_at=link.updated_at,
        presentation=build_presentation(link),
    )


def build_link_list_response(links: list[Link]) -> LinkListResponse:
    return LinkListResponse(
        data=[build_link_response(link) for link in links],
        meta={
            "total": len(links),
            "active": sum(1 for link in links if link.is_active),
        },
    )
