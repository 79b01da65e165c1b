from contextlib import contextmanager

from grease import db


@contextmanager
def transaction():
    """Run the enclosed block as one database transaction.

    Commits the session when the block finishes and rolls everything back
    if it raises. The exception is re-raised for the caller.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
