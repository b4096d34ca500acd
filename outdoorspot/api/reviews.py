"""Reviews. Only the author may edit or delete a review."""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status

from outdoorspot.auth.dependencies import get_current_user, get_optional_user
from outdoorspot.db.repositories import ReviewRepository
from outdoorspot.dependencies import get_review_repository
from outdoorspot.errors import NotFoundError, PermissionDeniedError
from outdoorspot.models import Envelope, Review, ReviewCreate, ReviewUpdate, User

router = APIRouter(prefix="/reviews", tags=["Reviews"])


async def _owned_review(review_id: str, user: User, repo: ReviewRepository, action: str) -> Review:
    review = await repo.get(review_id)
    if review is None:
        raise NotFoundError("Review not found")
    if review.user_id != user.id:
        raise PermissionDeniedError(f"Not authorized to {action} this review")
    return review


@router.get("", response_model=Envelope[List[Review]])
async def list_reviews(
    repo: ReviewRepository = Depends(get_review_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    return Envelope[List[Review]](data=await repo.list_all())


@router.get("/{review_id}", response_model=Envelope[Review])
async def get_review(
    review_id: str,
    repo: ReviewRepository = Depends(get_review_repository),
    _user: Optional[User] = Depends(get_optional_user),
):
    review = await repo.get(review_id)
    if review is None:
        raise NotFoundError("Review not found")
    return Envelope[Review](data=review)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Envelope[Review])
async def create_review(
    payload: ReviewCreate,
    repo: ReviewRepository = Depends(get_review_repository),
    user: User = Depends(get_current_user),
):
    return Envelope[Review](data=await repo.create(user.id, payload))


@router.put("/{review_id}", response_model=Envelope[Review])
async def update_review(
    review_id: str,
    payload: ReviewUpdate,
    repo: ReviewRepository = Depends(get_review_repository),
    user: User = Depends(get_current_user),
):
    await _owned_review(review_id, user, repo, action="edit")
    review = await repo.update(review_id, payload.model_dump(exclude_unset=True))
    return Envelope[Review](data=review)


@router.delete("/{review_id}", response_model=Envelope[Any])
async def delete_review(
    review_id: str,
    repo: ReviewRepository = Depends(get_review_repository),
    user: User = Depends(get_current_user),
):
    await _owned_review(review_id, user, repo, action="delete")
    await repo.delete(review_id)
    return Envelope[Any](message="Review deleted successfully")
