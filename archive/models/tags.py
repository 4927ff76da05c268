from .base import db, Model, TimestampMixin


class Tag(Model, TimestampMixin):
    __tablename__ = "tags"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False, index=True)
