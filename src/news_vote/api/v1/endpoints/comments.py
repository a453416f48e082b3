# src/news_vote/api/v1/endpoints/comments.py
"""Comment deletion. Listing and posting live under /articles/{id}/comments."""

from fastapi import APIRouter, status

from news_vote.services import comments as comment_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: str, current_user: CurrentUserDep, db: SessionDep) -> None:
    """Delete a comment. Allowed for its author and for admins."""
    comment_service.delete_comment(db, comment_id, current_user)
