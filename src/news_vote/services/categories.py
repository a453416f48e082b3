"""Category management, including manual ordering."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from news_vote.core.errors import ConflictError, NotFoundError, ValidationError
from news_vote.models.category import Category

DIRECTION_UP = "up"
DIRECTION_DOWN = "down"


def list_categories(db: Session, *, include_inactive: bool = False) -> Sequence[Category]:
    """Return categories in display order."""
    stmt = select(Category).order_by(Category.order_index.asc(), Category.created_at.asc())
    if not include_inactive:
        stmt = stmt.where(Category.is_active.is_(True))
    return db.execute(stmt).scalars().all()


def get_category(db: Session, category_id: str) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def _commit_unique(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("A category with this slug already exists") from err


def create_category(
    db: Session,
    *,
    name: str,
    slug: str,
    color: str,
    icon: str | None = None,
) -> Category:
    """Add a category at the end of the display order."""
    last = db.execute(select(func.max(Category.order_index))).scalar_one_or_none()
    category = Category(
        name=name,
        slug=slug,
        color=color,
        icon=icon,
        order_index=(last or 0) + 1,
        is_active=True,
    )
    db.add(category)
    _commit_unique(db)
    db.refresh(category)
    return category


def update_category(db: Session, category_id: str, changes: dict[str, object]) -> Category:
    category = get_category(db, category_id)
    for key in ("name", "slug", "color", "icon", "is_active"):
        if key in changes:
            setattr(category, key, changes[key])
    _commit_unique(db)
    db.refresh(category)
    return category


def toggle_active(db: Session, category_id: str) -> Category:
    """Flip ``is_active``; inactive categories are hidden from the public list."""
    category = get_category(db, category_id)
    category.is_active = not category.is_active
    db.commit()
    db.refresh(category)
    return category


def move_category(db: Session, category_id: str, direction: str) -> Category:
    """Swap ``order_index`` with the neighbour above or below.

    Moving the first category up, or the last one down, is a no-op.
    """
    if direction not in (DIRECTION_UP, DIRECTION_DOWN):
        raise ValidationError("Direction must be 'up' or 'down'")

    category = get_category(db, category_id)
    if direction == DIRECTION_UP:
        stmt = (
            select(Category)
            .where(Category.order_index < category.order_index)
            .order_by(Category.order_index.desc())
        )
    else:
        stmt = (
            select(Category)
            .where(Category.order_index > category.order_index)
            .order_by(Category.order_index.asc())
        )
    neighbour = db.execute(stmt.limit(1)).scalar_one_or_none()
    if neighbour is None:
        return category

    category.order_index, neighbour.order_index = neighbour.order_index, category.order_index
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: str) -> None:
    """Delete a category; articles and short news keep existing uncategorized."""
    category = get_category(db, category_id)
    db.delete(category)
    db.commit()
    db.expire_all()
