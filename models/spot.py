import uuid

from models import db, utcnow
from config import DEFAULT_SPOT_STATUS, SPOT_STATUS_LABELS


class Spot(db.Model):
    """A damage location registered by an admin"""
    __tablename__ = 'spots'
    __table_args__ = {'extend_existing': True}

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    category = db.Column(db.String(255))
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    status = db.Column(db.String(64), default=DEFAULT_SPOT_STATUS)
    timestamp = db.Column(db.DateTime, default=utcnow)

    @property
    def status_label(self):
        return SPOT_STATUS_LABELS.get(self.status or DEFAULT_SPOT_STATUS, SPOT_STATUS_LABELS[DEFAULT_SPOT_STATUS])

    def to_dict(self):
        return {
            'id': self.id,
            'category': self.category,
            'title': self.title,
            'description': self.description,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'status': self.status or DEFAULT_SPOT_STATUS,
            'status_label': self.status_label,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None
        }

    def __repr__(self):
        return f"<Spot {self.id}: {self.title}>"
