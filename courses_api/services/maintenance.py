import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, func, inspect, select, text

from courses_api.core.database import Database
from courses_api.models.course import Course
from courses_api.models.enrollment import Enrollment
from courses_api.models.user import User

logger = logging.getLogger(__name__)

# Child tables first so foreign keys never dangle mid-reset
TABLES = {
    "enrollments": Enrollment,
    "courses": Course,
    "users": User,
}


def _has_sqlite_sequence(session) -> bool:
    if session.get_bind().dialect.name != "sqlite":
        return False
    statement = text("SELECT count(*) FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'")
    return session.execute(statement).scalar_one() > 0


def reset_tables(database: Database, tables: Optional[Iterable[str]] = None) -> Dict[str, int]:
    """
    Delete every row of the given tables (all of them by default).

    Returns the number of rows deleted per table. SQLite autoincrement
    counters are reset too, so ids start again at 1. Resetting a parent
    table while rows still reference it fails with an IntegrityError.
    """
    requested = set(tables) if tables is not None else set(TABLES)
    unknown = requested - set(TABLES)
    if unknown:
        raise ValueError(f"Unknown table(s): {', '.join(sorted(unknown))}. Available: {', '.join(TABLES)}")

    deleted = {}
    with database.session() as session:
        has_sequence = _has_sqlite_sequence(session)
        for name, model in TABLES.items():
            if name not in requested:
                continue
            result = session.execute(delete(model))
            deleted[name] = result.rowcount
            if has_sequence:
                session.execute(text("DELETE FROM sqlite_sequence WHERE name = :name"), {"name": name})
            logger.info(f"Table {name} reset, {result.rowcount} row(s) deleted")
        session.commit()

    return deleted


def check_database(database: Database) -> Dict[str, object]:
    """Report the engine, the tables present and the row count of each known table."""
    with database.session() as session:
        connection = session.connection()
        dialect = connection.dialect
        server_version = ".".join(str(part) for part in (dialect.server_version_info or ()))
        present: List[str] = sorted(inspect(connection).get_table_names())

        counts = {}
        for name, model in TABLES.items():
            if name in present:
                counts[name] = session.execute(select(func.count()).select_from(model)).scalar_one()

    return {
        "dialect": dialect.name,
        "server_version": server_version,
        "tables": present,
        "row_counts": counts,
    }
