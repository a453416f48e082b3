"""Comment helpers: one level of replies under each top-level comment."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from news_vote.core.constants import COMMENT_MAX_LENGTH, COMMENTS_PER_PAGE
from news_vote.core.errors import ForbiddenError, NotFoundError, ValidationError
from news_vote.models.article import Article
from news_vote.models.comment import Comment
from news_vote.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentAuthorInfo:
    """Public details of a comment's author."""

    id: str
    nickname: str
    avatar_url: str | None


@dataclass
class CommentThread:
    """A comment joined with its author and, for top-level ones, its replies."""

    id: str
    user_id: str
    article_id: str
    parent_id: str | None
    content: str
    created_at: datetime
    updated_at: datetime
    user: CommentAuthorInfo | None = None
    replies: list[CommentThread] = field(default_factory=list)


def _require_article(db: Session, article_id: str) -> None:
    if db.get(Article, article_id) is None:
        raise NotFoundError("Article not found")


def _thread(comment: Comment, author: User | None) -> CommentThread:
    return CommentThread(
        id=comment.id,
        user_id=comment.user_id,
        article_id=comment.article_id,
        parent_id=comment.parent_id,
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        user=(
            CommentAuthorInfo(id=author.id, nickname=author.nickname, avatar_url=author.avatar_url)
            if author is not None
            else None
        ),
    )


def list_comments(
    db: Session,
    article_id: str,
    *,
    page: int = 1,
    limit: int = COMMENTS_PER_PAGE,
) -> list[CommentThread]:
    """Return top-level comments oldest first, each with its replies nested."""
    _require_article(db, article_id)

    top_level = db.execute(
        select(Comment, User)
        .outerjoin(User, User.id == Comment.user_id)
        .where(Comment.article_id == article_id, Comment.parent_id.is_(None))
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()
    threads = [_thread(comment, author) for comment, author in top_level]
    if not threads:
        return threads

    by_id = {thread.id: thread for thread in threads}
    replies = db.execute(
        select(Comment, User)
        .outerjoin(User, User.id == Comment.user_id)
        .where(Comment.parent_id.in_(list(by_id)))
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    ).all()
    for comment, author in replies:
        by_id[comment.parent_id].replies.append(_thread(comment, author))
    return threads


def post_comment(
    db: Session,
    *,
    user_id: str,
    article_id: str,
    content: str,
    parent_id: str | None = None,
) -> Comment:
    """Create a comment after trimming and validating its content.

    Raises:
        ValidationError: If the trimmed content is empty or too long, or the
            parent is itself a reply or belongs to another article.
        NotFoundError: If the article or parent comment does not exist.
    """
    content = content.strip()
    if not content:
        raise ValidationError("Comment must not be empty")
    if len(content) > COMMENT_MAX_LENGTH:
        raise ValidationError(f"Comment must be at most {COMMENT_MAX_LENGTH} characters")

    _require_article(db, article_id)
    if parent_id is not None:
        parent = db.get(Comment, parent_id)
        if parent is None:
            raise NotFoundError("Parent comment not found")
        if parent.article_id != article_id:
            raise ValidationError("Parent comment belongs to another article")
        if parent.parent_id is not None:
            raise ValidationError("Replies can only be one level deep")

    comment = Comment(user_id=user_id, article_id=article_id, content=content, parent_id=parent_id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: str, actor: User) -> None:
    """Delete a comment (and its replies). Only the author or an admin may."""
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    if comment.user_id != actor.id and not actor.is_admin:
        raise ForbiddenError("Only the author or an admin can delete this comment")

    db.delete(comment)
    db.commit()
    db.expire_all()
    logger.info("Comment %s deleted by %s", comment_id, actor.id)
