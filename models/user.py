import uuid

from models import db, utcnow

USER_ACTIVE = 'active'
USER_BLOCKED = 'blocked'


class User(db.Model):
    """An end-user account of the reporting app"""
    __tablename__ = 'users'
    __table_args__ = {'extend_existing': True}

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255))
    email = db.Column(db.String(255))
    phone = db.Column(db.String(64))
    status = db.Column(db.String(32), default=USER_ACTIVE)
    created_at = db.Column(db.DateTime, default=utcnow)

    @property
    def is_blocked(self):
        return self.status == USER_BLOCKED

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'status': self.status or USER_ACTIVE
        }

    def __repr__(self):
        return f"<User {self.id}: {self.email}>"
