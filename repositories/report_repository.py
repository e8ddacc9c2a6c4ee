from sqlalchemy import select

from models.report import Report
from repositories.base_repository import BaseRepository


class ReportRepository(BaseRepository):
    """Handles all database operations related to citizen reports"""

    model = Report

    def find_latest_first(self):
        """All reports, newest submission first; reports sharing a timestamp come back by id"""
        query = select(Report).order_by(Report.timestamp.desc(), Report.id.asc())
        return self.session.execute(query).scalars().all()
