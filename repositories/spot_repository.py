from sqlalchemy import select

from models.spot import Spot
from repositories.base_repository import BaseRepository


class SpotRepository(BaseRepository):
    """Handles all database operations related to damage spots"""

    model = Spot

    def find_latest_first(self):
        query = select(Spot).order_by(Spot.timestamp.desc(), Spot.id.asc())
        return self.session.execute(query).scalars().all()
