from sqlalchemy import select, func

from models.admin import Admin
from repositories.base_repository import BaseRepository


class AdminRepository(BaseRepository):
    """Handles all database operations related to admin accounts"""

    model = Admin

    def find_by_email(self, email):
        """Find an admin by email, ignoring case"""
        query = select(Admin).where(func.lower(Admin.email) == email.strip().lower())
        return self.session.execute(query).scalars().first()
