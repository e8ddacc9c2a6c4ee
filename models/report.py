import enum
import uuid

from models import db, utcnow
from config import REPORT_STATUS_LABELS


class ReportStatus(str, enum.Enum):
    """Workflow state of a citizen report. Values are the labels stored on the document."""
    PENDING = REPORT_STATUS_LABELS['pending']
    IN_PROGRESS = REPORT_STATUS_LABELS['in_progress']
    DONE = REPORT_STATUS_LABELS['done']

    @classmethod
    def parse(cls, value):
        """Return the status for a stored label, or None for anything unrecognised"""
        try:
            return cls(value)
        except ValueError:
            return None


class ReportAction(str, enum.Enum):
    VERIFY = 'verify'
    COMPLETE = 'complete'


# (current status, action) -> next status
REPORT_TRANSITIONS = {
    (ReportStatus.PENDING, ReportAction.VERIFY): ReportStatus.IN_PROGRESS,
    (ReportStatus.IN_PROGRESS, ReportAction.COMPLETE): ReportStatus.DONE,
}


def next_status(current, action):
    """Next status after applying action to current, or None if the action is not allowed"""
    return REPORT_TRANSITIONS.get((current, action))


def allowed_actions(current):
    return [action for (status, action) in REPORT_TRANSITIONS if status == current]


class Report(db.Model):
    """A damage report submitted by a citizen"""
    __tablename__ = 'reports'
    __table_args__ = {'extend_existing': True}

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    report_type = db.Column(db.String(255))
    description = db.Column(db.Text)
    latitude = db.Column(db.Float, nullable=True)
    longitude = db.Column(db.Float, nullable=True)
    status = db.Column(db.String(64), default=ReportStatus.PENDING.value)
    timestamp = db.Column(db.DateTime, default=utcnow)
    user_id = db.Column(db.String(128))
    location = db.Column(db.String(255))
    image_url = db.Column(db.String(1024))

    # Fields sent by the reporting app that the admin side does not interpret
    extra = db.Column(db.JSON, default=dict)

    def to_dict(self):
        data = dict(self.extra or {})
        data.update({
            'id': self.id,
            'report_type': self.report_type,
            'description': self.description,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'status': self.status,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'user_id': self.user_id,
            'location': self.location,
            'image_url': self.image_url
        })
        return data

    def __repr__(self):
        return f"<Report {self.id}: {self.status}>"
