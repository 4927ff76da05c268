from .base import db, Model, TimestampMixin


class Image(Model, TimestampMixin):
    __tablename__ = "images"
    __table_args__ = (db.UniqueConstraint("user_id", "filename", name="uq_images_user_filename"),)

    id = db.Column(db.Integer, primary_key=True)
    filename = db.Column(db.String(255), nullable=False)
    size = db.Column(db.Integer, nullable=False)
    width = db.Column(db.Integer, nullable=False)
    height = db.Column(db.Integer, nullable=False)
    mime_type = db.Column(db.String(32), nullable=False)
    is_public = db.Column(db.Boolean, nullable=False, default=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    user = db.relationship("User", back_populates="images")
