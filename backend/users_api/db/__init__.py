"""Database Package — SQLAlchemy declarative Base shared by all ORM models."""
