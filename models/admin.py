import uuid

from models import db, utcnow
from config import ADMIN_ROLE


class Admin(db.Model):
    """An administrator account and its profile"""
    __tablename__ = 'admins'
    __table_args__ = {'extend_existing': True}

    uid = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255))
    no_phone = db.Column(db.String(64), default='')
    role = db.Column(db.String(32), default=ADMIN_ROLE)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'uid': self.uid,
            'email': self.email,
            'name': self.name,
            'no_phone': self.no_phone or '',
            'role': self.role or ADMIN_ROLE,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f"<Admin {self.uid}: {self.email}>"
