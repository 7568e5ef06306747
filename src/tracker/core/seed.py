"""Demo projects for local setups and test fixtures."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.logging import get_logger
from src.tracker.models import Project, ProjectPriority, ProjectStatus
from src.tracker.repositories import ProjectRepository

logger = get_logger(__name__)

DEMO_PROJECTS: list[dict] = [
    {
        "name": "E-commerce Website",
        "description": "Full online store with shopping cart and payment",
        "status": ProjectStatus.IN_PROGRESS.value,
        "priority": ProjectPriority.HIGH.value,
        "created_at": datetime(2024, 1, 15),
        "updated_at": datetime(2024, 12, 30),
    },
    {
        "name": "Mobile App",
        "description": "React Native mobile application for task management",
        "status": ProjectStatus.TODO.value,
        "priority": ProjectPriority.MEDIUM.value,
        "created_at": datetime(2024, 1, 20),
        "updated_at": datetime(2024, 1, 20),
    },
    {
        "name": "REST API",
        "description": "RESTful API with JWT authentication and Swagger documentation",
        "status": ProjectStatus.COMPLETED.value,
        "priority": ProjectPriority.HIGH.value,
        "created_at": datetime(2024, 1, 10),
        "updated_at": datetime(2024, 1, 25),
    },
    {
        "name": "Analytics Dashboard",
        "description": "Admin interface with real-time charts and statistics",
        "status": ProjectStatus.TODO.value,
        "priority": ProjectPriority.LOW.value,
        "created_at": datetime(2024, 1, 22),
        "updated_at": datetime(2024, 1, 22),
    },
]


async def seed_projects(session: AsyncSession) -> list[Project]:
    """Insert the demo projects and commit.

    Ids are left to the store so its sequence stays in step.
    """
    repo = ProjectRepository(session)
    projects = [Project(**row) for row in DEMO_PROJECTS]
    for project in projects:
        await repo.insert(project)
    await session.commit()
    logger.info("Seeded demo projects", count=len(projects))
    return projects


async def seed_if_empty(session: AsyncSession) -> bool:
    """Seed only when the projects table has no rows. Returns True if seeded."""
    repo = ProjectRepository(session)
    if await repo.count():
        return False
    await seed_projects(session)
    return True
