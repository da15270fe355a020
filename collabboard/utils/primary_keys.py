"""Utilities for ensuring UUID primary keys are populated."""
from __future__ import annotations

import uuid
from typing import Type

from sqlalchemy import event
from sqlalchemy.orm import Mapper


def new_id() -> str:
    return str(uuid.uuid4())


def register_uuid_pk_listener(model: Type[object], pk_name: str = "id") -> None:
    """Ensure ``model`` receives an opaque UUID string primary key before insert.

    Identifiers are generated by the application rather than the database so
    the same schema works on SQLite and PostgreSQL alike. A value supplied by
    the caller is left untouched, which lets tests and imports pin ids.
    """

    table = getattr(model, "__table__", None)
    if table is None or pk_name not in table.c:
        raise ValueError(f"Model {model!r} does not expose a '{pk_name}' column")

    @event.listens_for(model, "before_insert", propagate=True)
    def _assign_uuid_pk(_: Mapper, connection, target) -> None:  # pragma: no cover - SQLAlchemy callback
        if getattr(target, pk_name) is not None:
            return
        setattr(target, pk_name, new_id())
