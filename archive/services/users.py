"""User accounts: hashed passwords, unique e-mail, login bookkeeping.

Passwords are hashed with ``werkzeug.security`` and never leave the service.
Session management lives outside this package.
"""
import datetime as dt
import logging
import re
from typing import Any, Optional

from pydantic import ValidationInfo, field_validator
from werkzeug.security import check_password_hash, generate_password_hash

from archive.config import DEFAULT_PASSWORD_HASH_METHOD, USER_NAME_LENGTH
from archive.errors import ValidationError
from archive.models import Character, Image, User
from .base import ResourceService
from .fields import Payload, is_required, serialize_columns
from .uow import unit_of_work
from .validators import (
    UNSET,
    parse_id,
    validate_bool,
    validate_email,
    validate_name,
    validate_password,
    validate_text,
)

logger = logging.getLogger(__name__)

USER_NAME_RE = re.compile(r"^[a-zA-Z0-9\s]+$")


class UserFields(Payload):
    name: Any = UNSET
    email: Any = UNSET
    password: Any = UNSET
    avatar_path: Any = UNSET
    is_verified: Any = UNSET
    is_active: Any = UNSET

    @field_validator("name")
    @classmethod
    def _name(cls, v, info: ValidationInfo):
        lo, hi = USER_NAME_LENGTH
        return validate_name(
            v,
            "User name",
            min_length=lo,
            max_length=hi,
            required=is_required(info),
            pattern=USER_NAME_RE,
            pattern_hint="can only contain letters, numbers, and spaces",
        )

    @field_validator("email")
    @classmethod
    def _email(cls, v, info: ValidationInfo):
        return validate_email(v, required=is_required(info))

    @field_validator("password")
    @classmethod
    def _password(cls, v, info: ValidationInfo):
        return validate_password(v, required=is_required(info))

    @field_validator("avatar_path")
    @classmethod
    def _avatar_path(cls, v):
        return validate_text(v, "avatarPath", max_length=255)

    @field_validator("is_verified", "is_active")
    @classmethod
    def _flag(cls, v, info: ValidationInfo):
        return validate_bool(v, "isVerified" if info.field_name == "is_verified" else "isActive")


class UserService(ResourceService):
    model = User
    entity = "User"
    fields_cls = UserFields
    searchable = ("name", "email")
    sortable = ResourceService.sortable + ("email", "is_active", "is_verified", "last_login_at")
    unique_field = "email"
    conflict_template = 'User with email "{value}" already exists'

    def __init__(self, session, hash_method: str = DEFAULT_PASSWORD_HASH_METHOD):
        super().__init__(session)
        self.hash_method = hash_method

    def serialize(self, row):
        return serialize_columns(row, exclude=("password",))

    def _hash(self, values):
        if "password" in values:
            values["password"] = generate_password_hash(values["password"], method=self.hash_method)
        return values

    def validate_create(self, values):
        values = self._hash(values)
        # new accounts always start unverified and active
        values.update(is_verified=False, is_active=True)
        return values

    def validate_update(self, values):
        return self._hash(values)

    def reference_counts(self, row):
        return {
            "characters": self.session.query(Character.id).filter(Character.user_id == row.id).count(),
            "images": self.session.query(Image.id).filter(Image.user_id == row.id).count(),
        }

    def delete_blocked_message(self, row, counts):
        return (
            f'Cannot delete user "{row.name}" ({row.email}) as they have associated data '
            f'(characters: {counts["characters"]}, images: {counts["images"]})'
        )

    def email_exists(self, email, exclude_id=None) -> bool:
        email = validate_email(email, required=True)
        if exclude_id is not None:
            exclude_id = parse_id(exclude_id, "Exclude")
        return self._conflicts({"email": email}, exclude_id)

    def verify_password(self, email, password) -> Optional[dict]:
        """Return the active user owning ``email`` when ``password`` matches, else None."""
        if not email or not isinstance(email, str):
            raise ValidationError("Email is required and must be a string")
        if not password or not isinstance(password, str):
            raise ValidationError("Password is required and must be a string")
        email = email.strip().lower()
        with unit_of_work(self.session):
            user = self.session.query(User).filter(User.email == email, User.is_active.is_(True)).first()
            if user is None or not check_password_hash(user.password, password):
                logger.info("login_failed email=%s", email)
                return None
            user.last_login_at = dt.datetime.utcnow()
            self.session.flush()
            out = self.serialize(user)
        logger.info("login user_id=%s", out["id"])
        return out

    def update_last_login(self, user_id) -> dict:
        user_id = parse_id(user_id, self.entity)
        with unit_of_work(self.session):
            user = self._require(User, self.entity, user_id)
            user.last_login_at = dt.datetime.utcnow()
            self.session.flush()
            return self.serialize(user)
