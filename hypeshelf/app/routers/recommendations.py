"""Recommendation routes."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from hypeshelf.app.dependencies import recommendation_gateway
from hypeshelf.app.models import CreatedResponse, StaffPickRequest
from hypeshelf.app.oauth import get_caller
from hypeshelf.constants import DEFAULT_PUBLIC_COUNT
from hypeshelf.core.recommendations import RecommendationGateway
from hypeshelf.models.caller import CallerContext
from hypeshelf.models.recommendation import (
    PublicRecommendation,
    RecommendationFields,
    RecommendationListing,
)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("/public", response_model=list[PublicRecommendation])
def read_public_recommendations(
    count: int = Query(DEFAULT_PUBLIC_COUNT, description="Clamped to 1-100"),
    gateway: RecommendationGateway = Depends(recommendation_gateway),
) -> list[PublicRecommendation]:
    """Get the latest recommendations without author identities. No auth needed."""
    return gateway.list_public(count)


@router.get("/genres", response_model=list[str])
def read_genres(
    gateway: RecommendationGateway = Depends(recommendation_gateway),
) -> list[str]:
    """Get the sorted genres that currently have recommendations."""
    return gateway.get_genres()


@router.get("", response_model=RecommendationListing)
def read_recommendations(
    genre: Optional[str] = Query(None, description="Genre to filter by, or 'all'"),
    caller: CallerContext = Depends(get_caller),
    gateway: RecommendationGateway = Depends(recommendation_gateway),
) -> RecommendationListing:
    """Get all recommendations for a signed-in user.

    Includes author ids and the caller's role so clients can decide which
    edit and delete controls to show.
    """
    return gateway.list_all(caller, genre=genre)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_recommendation(
    fields: RecommendationFields,
    caller: CallerContext = Depends(get_caller),
    gateway: RecommendationGateway = Depends(recommendation_gateway),
) -> CreatedResponse:
    return CreatedResponse(id=gateway.create(caller, fields))


@router.put("/{rec_id}", response_model=CreatedResponse)
def update_recommendation(
    rec_id: UUID,
    fields: RecommendationFields,
    caller: CallerContext = Depends(get_caller),
    gateway: RecommendationGateway = Depends(recommendation_gateway),
) -> CreatedResponse:
    """Replace a recommendation's content. Authors and admins only."""
    return CreatedResponse(id=gateway.update(caller, rec_id, fields))


@router.delete("/{rec_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recommendation(
    rec_id: UUID,
    caller: CallerContext = Depends(get_caller),
    gateway: RecommendationGateway = Depends(recommendation_gateway),
) -> Response:
    """Permanently delete a recommendation. Authors and admins only."""
    gateway.delete(caller, rec_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{rec_id}/staff-pick", status_code=status.HTTP_204_NO_CONTENT)
def update_staff_pick(
    rec_id: UUID,
    request: StaffPickRequest,
    caller: CallerContext = Depends(get_caller),
    gateway: RecommendationGateway = Depends(recommendation_gateway),
) -> Response:
    """Mark or unmark a staff pick. Admins only."""
    gateway.toggle_staff_pick(caller, rec_id, request.is_staff_pick)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
