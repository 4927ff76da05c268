import datetime as dt

from flask_sqlalchemy import SQLAlchemy

# Single SQLAlchemy instance shared by the app
db = SQLAlchemy()

# Convenience exports
Model = db.Model
metadata = db.metadata


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=dt.datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow
    )
