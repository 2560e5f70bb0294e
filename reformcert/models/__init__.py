"""
models/__init__.py — imports all ORM models so Alembic's env.py
sees them via Base.metadata.
"""
from reformcert.models.category_summary import CategorySummaryORM
from reformcert.models.work_item import WorkItemORM

__all__ = ["CategorySummaryORM", "WorkItemORM"]
