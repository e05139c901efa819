"""
Demo data for local development.

Courses come from a fixed catalog, users are generated from name lists and
every user is enrolled in a random subset of the courses.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select

from courses_api.core.database import Database
from courses_api.models.course import Course
from courses_api.models.enrollment import Enrollment
from courses_api.models.user import User

logger = logging.getLogger(__name__)

COURSE_CATALOG = [
    {"title": "Curso de React", "description": None},
    {"title": "n8n", "description": None},
    {"title": "TypeScript", "description": None},
    {"title": "Docker", "description": None},
    {"title": "PostgreSQL", "description": None},
    {"title": "Next.js", "description": None},
    {"title": "Go", "description": None},
    {"title": "Engenharia de Prompt", "description": None},
    {"title": "Python", "description": None},
    {"title": "Git", "description": None},
    {"title": "Bootstrap", "description": None},
    {"title": "Cursor AI", "description": "Cursor AI is an intelligent code editor"},
    {"title": "Crewai", "description": "Crewai is an AI framework for application development"},
    {"title": "Multi agente com Crewai", "description": "Creating Multi Agent Systems with CrewAI"},
    {"title": "MCPs", "description": "MCPs are communication interfaces for AI"},
    {"title": "Deploy com Crewai", "description": "Deploying applications with CrewAI"},
    {"title": "Criando agentes com Agno", "description": None},
    {"title": "Soft Skills", "description": None},
    {"title": "Apps Desktop com Electron", "description": None},
    {"title": "Acessibilidade com ReactJS", "description": None},
]

FIRST_NAMES = [
    "Ana", "Bruno", "Carla", "Diego", "Elisa", "Felipe", "Gabriela", "Heitor",
    "Isabela", "João", "Larissa", "Marcos", "Natália", "Otávio", "Paula", "Rafael",
]

LAST_NAMES = [
    "Almeida", "Barbosa", "Cardoso", "Costa", "Ferreira", "Gomes", "Lima",
    "Martins", "Oliveira", "Pereira", "Ribeiro", "Santos", "Silva", "Souza",
]

EMAIL_DOMAIN = "example.com"


def _require_positive(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValueError(f"{name} must be a positive integer")


def seed_courses(database: Database, limit: Optional[int] = None) -> List[Course]:
    """Insert catalog courses, skipping titles that already exist."""
    catalog = COURSE_CATALOG
    if limit is not None:
        _require_positive("Course limit", limit)
        catalog = catalog[:limit]
        logger.info(f"Limit of {limit} courses applied")

    with database.session() as session:
        existing = set(session.execute(select(Course.title)).scalars())
        new_courses = [Course(**course) for course in catalog if course["title"] not in existing]
        session.add_all(new_courses)
        session.commit()

    skipped = len(catalog) - len(new_courses)
    logger.info(f"Courses inserted: {len(new_courses)} | Skipped: {skipped}")
    return new_courses


def seed_users(database: Database, count: int, rng: Optional[random.Random] = None) -> List[User]:
    """Insert count generated users with unique emails."""
    _require_positive("User count", count)
    rng = rng or random.Random()

    with database.session() as session:
        start = (session.execute(select(User.id).order_by(User.id.desc()).limit(1)).scalar() or 0) + 1
        users = []
        for offset in range(count):
            first_name = rng.choice(FIRST_NAMES)
            last_name = rng.choice(LAST_NAMES)
            sequence = start + offset
            users.append(User(
                first_name=first_name,
                last_name=last_name,
                email=f"{first_name}.{last_name}.{sequence}@{EMAIL_DOMAIN}".lower(),
            ))
        session.add_all(users)
        session.commit()

    logger.info(f"{len(users)} users created")
    return users


def seed_enrollments(
    database: Database,
    users: Sequence[User],
    courses: Sequence[Course],
    per_user: int,
    rng: Optional[random.Random] = None,
) -> List[Enrollment]:
    """
    Enroll each user in per_user random courses without repetition.

    Courses are shuffled per user and the first per_user are taken; pairs
    that are already enrolled are skipped. All new rows go in one insert.
    """
    _require_positive("Enrollments per user", per_user)
    rng = rng or random.Random()

    if not users or not courses:
        logger.warning("No users or courses to create enrollments")
        return []

    per_user_capped = min(per_user, len(courses))
    if per_user_capped < per_user:
        logger.warning(f"Adjusting enrollments per user from {per_user} to {per_user_capped} (available courses)")

    course_ids = [course.id for course in courses]
    user_ids = [user.id for user in users]

    with database.session() as session:
        existing = set(
            session.execute(
                select(Enrollment.user_id, Enrollment.course_id).where(Enrollment.user_id.in_(user_ids))
            ).tuples()
        )

        enrollments = []
        skipped = 0
        for user_id in user_ids:
            shuffled = list(course_ids)
            rng.shuffle(shuffled)
            for course_id in shuffled[:per_user_capped]:
                if (user_id, course_id) in existing:
                    skipped += 1
                    continue
                enrollments.append(Enrollment(user_id=user_id, course_id=course_id))

        session.add_all(enrollments)
        session.commit()

    logger.info(f"{len(enrollments)} enrollments created")
    if skipped:
        logger.warning(f"{skipped} already existing enrollments were skipped")
    return enrollments


def seed_all(
    database: Database,
    users: int = 5,
    courses_limit: Optional[int] = None,
    enrollments_per_user: int = 3,
    rng: Optional[random.Random] = None,
) -> Dict[str, int]:
    """Seed users and courses, then enroll the new users in the new courses."""
    _require_positive("User count", users)
    _require_positive("Enrollments per user", enrollments_per_user)
    rng = rng or random.Random()

    created_users = seed_users(database, users, rng=rng)
    created_courses = seed_courses(database, courses_limit)
    created_enrollments = seed_enrollments(
        database, created_users, created_courses, enrollments_per_user, rng=rng
    )

    summary = {
        "users": len(created_users),
        "courses": len(created_courses),
        "enrollments": len(created_enrollments),
    }
    logger.info(
        f"Seed finished: {summary['users']} users | {summary['courses']} courses | "
        f"{summary['enrollments']} enrollments"
    )
    return summary
