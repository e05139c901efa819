import logging
from typing import Any, Dict, List, Optional, Sequence, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from courses_api.core.database import Base
from courses_api.core.timestamps import with_epoch_timestamps
from courses_api.utils.exceptions import ConflictError

logger = logging.getLogger(__name__)


def insert_records(
    session: Session,
    model: Type[Base],
    records: Sequence[Dict[str, Any]],
    conflict_message: str,
) -> List[Base]:
    """
    Insert one or more rows in a single flush and commit.

    Unique or foreign key violations roll the whole batch back and surface
    as ConflictError.
    """
    instances = [model(**record) for record in records]
    session.add_all(instances)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Rejected insert into {model.__tablename__}: {e.orig}")
        raise ConflictError(conflict_message)

    logger.info(f"Inserted {len(instances)} row(s) into {model.__tablename__}")
    return instances


def get_by_id(session: Session, model: Type[Base], record_id: int) -> Optional[Base]:
    return session.execute(select(model).where(model.id == record_id)).scalar_one_or_none()


def serialize(instance: Base, fields: Sequence[str]) -> Dict[str, Any]:
    """Public shape of an ORM row: the listed fields, timestamps in epoch ms."""
    return with_epoch_timestamps({name: getattr(instance, name) for name in fields})
