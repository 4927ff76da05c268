# archive/cli.py - archive database CLI
import argparse
import json
import os
from typing import Dict, List

from flask import current_app

from archive import create_app
from archive.models import Archetype, Character, Item, Race, Skill, Tag, User, db
from archive.services import (
    ArchetypeService,
    CharacterService,
    ItemService,
    RaceService,
    SkillService,
    TagService,
    UserService,
)

DEFAULT_SEED_FILE = os.path.join(os.path.dirname(__file__), "seeds", "demo.json")


def _ids(model, names: List[str]) -> List[int]:
    rows = model.query.filter(model.name.in_(names)).all()
    return [r.id for r in rows]


def _name_id(model, name: str) -> int:
    return model.query.filter_by(name=name).one().id


def _seed_named(service, model, entries: List[dict], counts: Dict[str, int], label: str) -> None:
    """Create every entry whose name is not taken yet, then attach its skills and tags."""
    for entry in entries:
        payload = {k: v for k, v in entry.items() if k not in ("skills", "tags")}
        existing = model.query.filter_by(name=payload["name"]).first()
        if existing is not None:
            counts["skipped"] += 1
            continue
        row = service.create(payload)
        counts[label] += 1
        if entry.get("skills"):
            service.associate_skills(row["id"], _ids(Skill, entry["skills"]))
        if entry.get("tags"):
            service.associate_tags(row["id"], _ids(Tag, entry["tags"]))


def cmd_init(args):
    db.create_all()
    print(json.dumps({"ok": True, "tables": sorted(db.metadata.tables)}, indent=2))


def cmd_seed(args):
    path = args.file
    if not os.path.exists(path):
        print(f"Seed file not found: {path}")
        return 1
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)

    db.create_all()
    session = db.session
    counts = {"tags": 0, "skills": 0, "races": 0, "archetypes": 0, "items": 0, "users": 0, "characters": 0, "skipped": 0}

    tags = TagService(session)
    for name in payload.get("tags") or []:
        if tags.exists(name):
            counts["skipped"] += 1
            continue
        tags.create({"name": name})
        counts["tags"] += 1

    _seed_named(SkillService(session), Skill, payload.get("skills") or [], counts, "skills")
    _seed_named(RaceService(session), Race, payload.get("races") or [], counts, "races")
    _seed_named(ArchetypeService(session), Archetype, payload.get("archetypes") or [], counts, "archetypes")
    _seed_named(ItemService(session), Item, payload.get("items") or [], counts, "items")

    users = UserService(session, args.hash_method or current_app.config["PASSWORD_HASH_METHOD"])
    for entry in payload.get("users") or []:
        if users.email_exists(entry["email"]):
            counts["skipped"] += 1
            continue
        users.create(entry)
        counts["users"] += 1

    characters = CharacterService(session)
    for entry in payload.get("characters") or []:
        user = User.query.filter_by(email=entry["user"]).one()
        if Character.query.filter_by(user_id=user.id, name=entry["name"]).first() is not None:
            counts["skipped"] += 1
            continue
        data = {k: v for k, v in entry.items() if k not in ("user", "race", "archetype", "equipment", "items", "tags")}
        data.update(
            userId=user.id,
            raceId=_name_id(Race, entry["race"]),
            archetypeId=_name_id(Archetype, entry["archetype"]),
        )
        for slot, item_name in (entry.get("equipment") or {}).items():
            data[slot] = _name_id(Item, item_name)
        row = characters.create(data)
        counts["characters"] += 1
        if entry.get("items"):
            characters.associate_items(row["id"], _ids(Item, entry["items"]))
        if entry.get("tags"):
            characters.associate_tags(row["id"], _ids(Tag, entry["tags"]))

    print(json.dumps({"ok": True, "file": path, **counts}, indent=2))
    return 0


def build_parser():
    p = argparse.ArgumentParser(description="Character archive DB CLI")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("init", help="Create all tables")
    s.set_defaults(func=cmd_init)

    s = sub.add_parser("seed", help="Load the demo data set (existing names are skipped)")
    s.add_argument("--file", default=DEFAULT_SEED_FILE, help="Seed JSON file")
    s.add_argument("--hash-method", default=None, help="werkzeug password hash method")
    s.set_defaults(func=cmd_seed)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    app = create_app({"AUTO_CREATE_TABLES": False})
    with app.app_context():
        return args.func(args) or 0


if __name__ == "__main__":
    raise SystemExit(main())
