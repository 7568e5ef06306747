"""Base factory configuration for polyfactory."""

from datetime import UTC, datetime

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory


def utc_now() -> datetime:
    """Generate current UTC time (naive, as stored in the database)."""
    return datetime.now(UTC).replace(tzinfo=None)


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Primary keys are left to the database.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False
