import pytest
from sqlalchemy import event

from archive import create_app
from archive.models import db
from archive.services import ArchetypeService, ItemService, RaceService, UserService

TEST_CONFIG = {
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "TESTING": True,
    "AUTO_CREATE_TABLES": False,
    # fast hashing for tests
    "PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.drop_all(); db.create_all()
        yield app
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def statements(session):
    """SQL statements sent to the engine from here on."""
    seen = []

    def record(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    event.listen(db.engine, "before_cursor_execute", record)
    yield seen
    event.remove(db.engine, "before_cursor_execute", record)


@pytest.fixture
def refs(session):
    """One active user, one race, one archetype and a couple of items."""
    user = UserService(session, TEST_CONFIG["PASSWORD_HASH_METHOD"]).create(
        {"name": "Alice", "email": "alice@example.com", "password": "secret-pass"}
    )
    race = RaceService(session).create({"name": "Elf", "strengthModifier": 2, "healthModifier": -5})
    archetype = ArchetypeService(session).create({"name": "Warrior"})
    items = ItemService(session)
    sword = items.create({"name": "Iron Sword", "isWeapon": True, "attack": 15, "bonusStrength": 3})
    armor = items.create(
        {"name": "Leather Armor", "isArmor": True, "defense": 12, "bonusHealth": 10, "bonusDexterity": 2}
    )
    return {"user": user, "race": race, "archetype": archetype, "sword": sword, "armor": armor}
