"""Shared service plumbing: reads, deletes, uniqueness and association helpers.

Concrete services set the class attributes (``model``, ``entity``,
``fields_cls`` ...) and override, where needed, ``validate_create`` /
``validate_update`` (defaults, derived values), ``check_references`` and
``reference_counts``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from archive.errors import BusinessLogicError, EntityNotFoundError
from archive.models import Skill, Tag
from .fields import parse_payload, serialize_columns
from .query import ListParams, paginate
from .uow import unit_of_work
from .validators import parse_id, validate_id_list, validate_name

logger = logging.getLogger(__name__)


def count_links(session, table, column: str, value: int) -> int:
    return session.query(func.count()).select_from(table).filter(table.c[column] == value).scalar()


class ResourceService:
    model = None
    entity = "Resource"
    fields_cls = None
    default_order = "name"
    searchable: Tuple[str, ...] = ("name",)
    sortable: Tuple[str, ...] = ("id", "name", "created_at", "updated_at")

    # uniqueness: value of ``unique_field`` must be unique within ``unique_scope``
    unique_field = "name"
    unique_scope: Tuple[str, ...] = ()
    name_max_length = 100
    conflict_template = '{entity} with name "{value}" already exists'

    def __init__(self, session):
        self.session = session

    # ---- serialization --------------------------------------------------

    def serialize(self, row) -> Dict[str, Any]:
        return serialize_columns(row)

    def base_query(self):
        return self.session.query(self.model)

    # ---- reads ----------------------------------------------------------

    def get_many(self, params: Optional[ListParams] = None) -> Dict[str, Any]:
        return paginate(
            self.session,
            self.base_query(),
            self.model,
            params or ListParams(),
            default_order=self.default_order,
            searchable=self.searchable,
            sortable=self.sortable,
            serialize=self.serialize,
        )

    def get_one(self, entity_id) -> Optional[Dict[str, Any]]:
        entity_id = parse_id(entity_id, self.entity)
        with unit_of_work(self.session):
            row = self.session.get(self.model, entity_id)
            return self.serialize(row) if row is not None else None

    def exists(self, name, exclude_id=None) -> bool:
        """True when another row already uses ``name``."""
        name = validate_name(name, f"{self.entity} name", required=True, max_length=self.name_max_length)
        if exclude_id is not None:
            exclude_id = parse_id(exclude_id, "Exclude")
        return self._conflicts({self.unique_field: name}, exclude_id)

    # ---- writes ---------------------------------------------------------

    def validate_create(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return values

    def validate_update(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return values

    def check_references(self, values: Dict[str, Any], row=None) -> None:
        """Verify referenced rows for a create (``row`` is None) or an update."""

    def check_row(self, row) -> None:
        """Cross-field rules on the fully merged row, run before commit."""

    def create(self, payload) -> Dict[str, Any]:
        data = parse_payload(self.fields_cls, payload, required=True)
        values = self.validate_create(data.provided())
        try:
            with unit_of_work(self.session):
                self.check_references(values)
                self._ensure_unique(values)
                row = self.model(**values)
                self.check_row(row)
                self.session.add(row)
                self.session.flush()
                out = self.serialize(row)
        except IntegrityError as exc:
            raise BusinessLogicError(self._conflict_message(values)) from exc
        logger.info("create entity=%s id=%s", self.entity, out["id"])
        return out

    def update(self, payload) -> Optional[Dict[str, Any]]:
        data = parse_payload(self.fields_cls, payload)
        entity_id = parse_id(data.id, self.entity)
        changes = self.validate_update(data.provided())
        merged: Dict[str, Any] = {}
        try:
            with unit_of_work(self.session):
                row = self.session.get(self.model, entity_id)
                if row is None:
                    return None
                self.check_references(changes, row)
                merged = {k: getattr(row, k) for k in (self.unique_field,) + self.unique_scope}
                merged.update({k: v for k, v in changes.items() if k in merged})
                if any(k in changes for k in merged):
                    self._ensure_unique(merged, exclude_id=row.id)
                for key, value in changes.items():
                    setattr(row, key, value)
                self.check_row(row)
                self.session.flush()
                self.session.expire(row)
                out = self.serialize(row)
        except IntegrityError as exc:
            raise BusinessLogicError(self._conflict_message({**merged, **changes})) from exc
        logger.info("update entity=%s id=%s fields=%s", self.entity, entity_id, ",".join(sorted(changes)))
        return out

    def delete(self, entity_id) -> None:
        entity_id = parse_id(entity_id, self.entity)
        with unit_of_work(self.session):
            row = self.session.get(self.model, entity_id)
            if row is None:
                raise EntityNotFoundError(self.entity, entity_id)
            counts = self.reference_counts(row)
            if sum(counts.values()):
                raise BusinessLogicError(self.delete_blocked_message(row, counts))
            self.session.delete(row)
        logger.info("delete entity=%s id=%s", self.entity, entity_id)

    def reference_counts(self, row) -> Dict[str, int]:
        return {}

    def delete_blocked_message(self, row, counts: Dict[str, int]) -> str:
        total = sum(counts.values())
        details = ", ".join(f"{k}: {v}" for k, v in counts.items())
        return (
            f'Cannot delete {self.entity.lower()} "{row.name}" as it is being used by '
            f"{total} other entities ({details})"
        )

    # ---- helpers --------------------------------------------------------

    def _conflicts(self, values: Dict[str, Any], exclude_id: Optional[int] = None) -> bool:
        q = self.session.query(self.model.id).filter(
            getattr(self.model, self.unique_field) == values[self.unique_field]
        )
        for key in self.unique_scope:
            q = q.filter(getattr(self.model, key) == values[key])
        if exclude_id is not None:
            q = q.filter(self.model.id != exclude_id)
        return q.first() is not None

    def _ensure_unique(self, values: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        if self._conflicts(values, exclude_id):
            raise BusinessLogicError(self._conflict_message(values))

    def _conflict_message(self, values: Dict[str, Any]) -> str:
        return self.conflict_template.format(entity=self.entity, value=values.get(self.unique_field))

    def _require(self, model, entity: str, entity_id: int):
        row = self.session.get(model, entity_id)
        if row is None:
            raise EntityNotFoundError(entity, entity_id)
        return row

    def _change_links(self, owner_id, target_ids, relation: str, target_model, target_label: str, *, add: bool):
        """Add or remove many-to-many links from the owner row to every target id.

        Adding requires every target to exist; removing ignores unknown ids.
        """
        owner_id = parse_id(owner_id, self.entity)
        ids = validate_id_list(target_ids, target_label)
        with unit_of_work(self.session):
            owner = self._require(self.model, self.entity, owner_id)
            targets = []
            if ids:
                targets = self.session.query(target_model).filter(target_model.id.in_(ids)).all()
            if add:
                found = {t.id for t in targets}
                missing = [str(i) for i in ids if i not in found]
                if missing:
                    raise EntityNotFoundError(f"{target_label}s", ", ".join(missing))
            links = getattr(owner, relation)
            for target in targets:
                if add and target not in links:
                    links.append(target)
                elif not add and target in links:
                    links.remove(target)
            self.session.flush()
            self.session.expire(owner, [relation])
            out = self.serialize(owner)
        logger.info(
            "%s entity=%s id=%s %s=%s",
            "link" if add else "unlink", self.entity, owner_id, relation, ",".join(map(str, ids)),
        )
        return out


class TaggedMixin:
    """``associate_tags`` / ``dissociate_tags`` for models with a ``tags`` relationship."""

    def associate_tags(self, entity_id, tag_ids):
        return self._change_links(entity_id, tag_ids, "tags", Tag, "Tag", add=True)

    def dissociate_tags(self, entity_id, tag_ids):
        return self._change_links(entity_id, tag_ids, "tags", Tag, "Tag", add=False)


class SkilledMixin:
    def associate_skills(self, entity_id, skill_ids):
        return self._change_links(entity_id, skill_ids, "skills", Skill, "Skill", add=True)

    def dissociate_skills(self, entity_id, skill_ids):
        return self._change_links(entity_id, skill_ids, "skills", Skill, "Skill", add=False)
