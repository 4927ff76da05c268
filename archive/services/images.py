"""Image metadata service. Binary storage is handled elsewhere."""
from typing import Any, Optional

from pydantic import ValidationInfo, field_validator

from archive.config import IMAGE_EXTENSIONS, MAX_IMAGE_BYTES, MAX_IMAGE_DIMENSION, MAX_IMAGES_PER_USER
from archive.errors import BusinessLogicError, ValidationError
from archive.models import Image, User
from .base import ResourceService
from .fields import Payload, is_required
from .query import ListParams, paginate
from .validators import (
    UNSET,
    parse_id,
    validate_bool,
    validate_choice,
    validate_int,
    validate_name,
    validate_positive_id,
)


class ImageFields(Payload):
    filename: Any = UNSET
    size: Any = UNSET
    width: Any = UNSET
    height: Any = UNSET
    mime_type: Any = UNSET
    is_public: Any = UNSET
    user_id: Any = UNSET

    @field_validator("filename")
    @classmethod
    def _filename(cls, v, info: ValidationInfo):
        return validate_name(v, "Image filename", max_length=255, required=is_required(info))

    @field_validator("size")
    @classmethod
    def _size(cls, v, info: ValidationInfo):
        return validate_int(v, "Image size", required=is_required(info), minimum=1, maximum=MAX_IMAGE_BYTES)

    @field_validator("width", "height")
    @classmethod
    def _dimension(cls, v, info: ValidationInfo):
        label = f"Image {info.field_name}"
        return validate_int(v, label, required=is_required(info), minimum=1, maximum=MAX_IMAGE_DIMENSION)

    @field_validator("mime_type")
    @classmethod
    def _mime_type(cls, v, info: ValidationInfo):
        return validate_choice(v, "MIME type", IMAGE_EXTENSIONS, required=is_required(info))

    @field_validator("is_public")
    @classmethod
    def _is_public(cls, v):
        return validate_bool(v, "Image isPublic")

    @field_validator("user_id")
    @classmethod
    def _user_id(cls, v, info: ValidationInfo):
        return validate_positive_id(v, "User ID", required=is_required(info))


def check_extension(filename: str, mime_type: str) -> None:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in IMAGE_EXTENSIONS.get(mime_type, ()):
        raise ValidationError(f"File extension does not match MIME type {mime_type}")


class ImageService(ResourceService):
    model = Image
    entity = "Image"
    fields_cls = ImageFields
    default_order = "filename"
    searchable = ("filename", "mime_type")
    sortable = ("id", "filename", "size", "width", "height", "mime_type", "created_at", "updated_at")
    unique_field = "filename"
    unique_scope = ("user_id",)
    name_max_length = 255
    conflict_template = 'Image with filename "{value}" already exists for this user'

    def validate_create(self, values):
        values.setdefault("is_public", False)
        return values

    def check_references(self, values, row=None):
        if "user_id" not in values:
            return
        user = self._require(User, "User", values["user_id"])
        if not user.is_active:
            verb = "upload image for" if row is None else "assign image to"
            raise BusinessLogicError(f"Cannot {verb} inactive user")
        if row is None or row.user_id != user.id:
            count = self.session.query(Image.id).filter(Image.user_id == user.id).count()
            if count >= MAX_IMAGES_PER_USER:
                raise BusinessLogicError(f"User has reached maximum image limit ({MAX_IMAGES_PER_USER} images)")

    def check_row(self, row) -> None:
        check_extension(row.filename, row.mime_type)

    def get_user_images(self, user_id, params: Optional[ListParams] = None) -> dict:
        """One page of a single user's images; the user must exist."""
        user_id = parse_id(user_id, "User")
        return paginate(
            self.session,
            self.base_query().filter(Image.user_id == user_id),
            Image,
            params or ListParams(),
            default_order=self.default_order,
            searchable=self.searchable,
            sortable=self.sortable,
            serialize=self.serialize,
            check=lambda: self._require(User, "User", user_id),
        )
