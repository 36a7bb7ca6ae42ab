"""
Translation of SQLAlchemy failures into the content pipeline's errors.
"""
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import StoreError, ValidationError
from ..logging_config import db_logger


@contextmanager
def store_operation(db: Session, action: str, **context):
    """
    Run a block of session work. On failure the session is rolled back;
    a unique-slug violation becomes ValidationError, anything else StoreError.
    """
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        if "slug" in str(e.orig).lower():
            db_logger.warning(f"{action}: slug conflict", **context)
            raise ValidationError("Slug is already in use", {"field": "slug"}) from e
        db_logger.error(f"{action} failed", error=e, **context)
        raise StoreError(f"{action} failed") from e
    except SQLAlchemyError as e:
        db.rollback()
        db_logger.error(f"{action} failed", error=e, **context)
        raise StoreError(f"{action} failed") from e


def check_length(column, value, field: str) -> None:
    """Reject a value longer than the column's declared VARCHAR length."""
    limit = getattr(column.type, "length", None)
    if value is not None and limit and len(value) > limit:
        raise ValidationError(
            f"{field} must be {limit} characters or fewer",
            {"field": field, "max_length": limit},
        )
