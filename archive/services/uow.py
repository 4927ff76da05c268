from contextlib import contextmanager


@contextmanager
def unit_of_work(session):
    """Run a block of storage calls atomically on ``session``.

    Commits when the block finishes, rolls back and re-raises on any
    exception (domain errors included).
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
