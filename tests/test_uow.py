import pytest

from archive.models import Tag
from archive.services.uow import unit_of_work


def test_commits_on_success(session):
    with unit_of_work(session):
        session.add(Tag(name="Fire"))
    session.expunge_all()
    assert session.query(Tag).filter_by(name="Fire").count() == 1


def test_rolls_back_and_reraises(session):
    with pytest.raises(RuntimeError, match="boom"):
        with unit_of_work(session):
            session.add(Tag(name="Ice"))
            session.flush()
            raise RuntimeError("boom")
    assert session.query(Tag).filter_by(name="Ice").count() == 0
