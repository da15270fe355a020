"""Ordering of columns within a board and tasks within a column.

New entities are always appended at ``max(position) + 1``. What happens on
move and delete depends on the :class:`PositionPolicy`:

``append-only``
    positions are overwritten exactly as requested and never reflowed, so
    gaps and duplicates may appear. This is the default.
``strict-reflow``
    the affected sibling sets are renumbered densely from 0 so the order
    stays a contiguous sequence.

Allocation reads the current maximum and the caller inserts afterwards in
the same transaction but without a lock, so two concurrent inserts into the
same parent can receive the same position.
"""
import enum
from typing import List, Optional, Union

from sqlalchemy import func
from sqlalchemy.orm import Session

from collabboard.config import settings
from collabboard.models import KanbanColumn, KanbanTask

Positioned = Union[KanbanColumn, KanbanTask]


class PositionPolicy(str, enum.Enum):
    APPEND_ONLY = "append-only"
    STRICT_REFLOW = "strict-reflow"


_PARENT_KEYS = {
    KanbanColumn: "board_id",
    KanbanTask: "column_id",
}


def resolve_policy(policy: Optional[Union[PositionPolicy, str]] = None) -> PositionPolicy:
    return PositionPolicy(policy or settings.POSITION_POLICY)


def _parent_attr(model):
    try:
        return getattr(model, _PARENT_KEYS[model])
    except KeyError:
        raise TypeError(f"{model.__name__} has no position ordering") from None


def next_position(model, parent_id: str, db: Session) -> int:
    """Next tail position among ``model`` rows under ``parent_id``, 0 when empty."""
    parent = _parent_attr(model)
    max_position = (
        db.query(func.max(model.position))
        .filter(parent == parent_id)
        .scalar()
    )
    return 0 if max_position is None else max_position + 1


def siblings(model, parent_id: str, db: Session, exclude_id: Optional[str] = None) -> List[Positioned]:
    query = db.query(model).filter(_parent_attr(model) == parent_id)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.order_by(model.position.asc(), model.created_at.asc()).all()


def _renumber(items: List[Positioned]) -> None:
    for index, item in enumerate(items):
        if item.position != index:
            item.position = index


def move(
    entity: Positioned,
    new_parent_id: str,
    new_position: int,
    db: Session,
    policy: Optional[Union[PositionPolicy, str]] = None,
) -> Positioned:
    """Place ``entity`` at ``new_position`` under ``new_parent_id``.

    Changes are left pending on the session; the caller commits.
    """
    model = type(entity)
    parent_key = _PARENT_KEYS[model]

    if resolve_policy(policy) is PositionPolicy.APPEND_ONLY:
        setattr(entity, parent_key, new_parent_id)
        entity.position = new_position
        return entity

    old_parent_id = getattr(entity, parent_key)
    target = siblings(model, new_parent_id, db, exclude_id=entity.id)
    index = max(0, min(new_position, len(target)))
    target.insert(index, entity)

    setattr(entity, parent_key, new_parent_id)
    _renumber(target)

    if old_parent_id != new_parent_id:
        _renumber(siblings(model, old_parent_id, db, exclude_id=entity.id))
    return entity


def compact(
    model,
    parent_id: str,
    db: Session,
    policy: Optional[Union[PositionPolicy, str]] = None,
    exclude_id: Optional[str] = None,
) -> None:
    """Close the gap left by a removed sibling when reflow is enabled."""
    if resolve_policy(policy) is PositionPolicy.APPEND_ONLY:
        return
    _renumber(siblings(model, parent_id, db, exclude_id=exclude_id))
