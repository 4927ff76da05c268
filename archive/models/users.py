from .base import db, Model, TimestampMixin


class User(Model, TimestampMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    # werkzeug hash string, never serialized
    password = db.Column(db.String(255), nullable=False)
    avatar_path = db.Column(db.String(255))
    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    last_login_at = db.Column(db.DateTime)

    characters = db.relationship("Character", back_populates="user", lazy="dynamic")
    images = db.relationship("Image", back_populates="user", lazy="dynamic")
