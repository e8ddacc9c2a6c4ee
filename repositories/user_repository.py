from models.user import User
from repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):
    """Handles all database operations related to end-user accounts"""

    model = User
