"""
SQLAlchemy declarative base
Every catalog ORM model derives from Base so create_all sees it.
"""
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


# Constraint names are stable across PostgreSQL and SQLite
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for catalog ORM models"""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
