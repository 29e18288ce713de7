"""
Contributor API Routes.

Thin handlers over the contribution store. Mutations answer 204 whatever
the outcome of the write; only lookups can fail, with a 500 carrying
``{"error": ...}``.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ...infra.db.repositories.contributor import ContributionStore
from ..schemas.contributors import ContributionStatus, ContributorDetail, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contributors", tags=["contributors"])


def get_store(request: Request) -> ContributionStore:
    """Dependency returning the store created at startup."""
    return request.app.state.store


@router.get(
    "/{uid}",
    response_model=ContributionStatus,
    responses={500: {"model": ErrorResponse}},
)
async def has_contributed(uid: str, store: ContributionStore = Depends(get_store)):
    """Check whether uid has ever started a contribution."""
    contributed = await store.has_contributed(uid)
    return ContributionStatus(uid=uid, has_contributed=contributed)


@router.get(
    "/{uid}/record",
    response_model=ContributorDetail,
    responses={404: {"description": "No record for uid"}, 500: {"model": ErrorResponse}},
)
async def get_contributor(uid: str, store: ContributionStore = Depends(get_store)):
    """Get the stored record for uid."""
    contributor = await store.get_contributor(uid)
    if contributor is None:
        raise HTTPException(status_code=404, detail=f"Contributor {uid} not found")
    return ContributorDetail.model_validate(contributor)


@router.post("/{uid}", status_code=status.HTTP_204_NO_CONTENT)
async def start_contribution(uid: str, store: ContributionStore = Depends(get_store)):
    """Record the start of a contribution."""
    await store.insert_contributor(uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{uid}/finish", status_code=status.HTTP_204_NO_CONTENT)
async def finish_contribution(uid: str, store: ContributionStore = Depends(get_store)):
    """Mark a contribution as finished."""
    await store.finish_contribution(uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{uid}/expire", status_code=status.HTTP_204_NO_CONTENT)
async def expire_contribution(uid: str, store: ContributionStore = Depends(get_store)):
    """Mark a contribution as expired."""
    await store.expire_contribution(uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
