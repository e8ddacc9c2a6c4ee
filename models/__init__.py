from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy without an app yet
db = SQLAlchemy()


def utcnow():
    """Naive UTC now, the form every DateTime column is stored in"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Import all models (AFTER db is defined)
from models.report import Report, ReportStatus, ReportAction
from models.spot import Spot
from models.user import User
from models.admin import Admin

# Make all models available when importing from models
__all__ = [
    'db',
    'Report',
    'ReportStatus',
    'ReportAction',
    'Spot',
    'User',
    'Admin'
]
