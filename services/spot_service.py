import logging
from collections import Counter

from config import DEFAULT_SPOT_STATUS, SPOT_STATUS_LABELS, UNCATEGORIZED_LABEL
from utils.distance_calculation import parse_coordinate
from utils.errors import ValidationError

logger = logging.getLogger(__name__)


class SpotService:
    """Damage locations registered by admins, and the dashboard statistics over them"""

    def __init__(self, backend):
        self.backend = backend

    def list_spots(self):
        return [spot.to_dict() for spot in self.backend.spots.find_latest_first()]

    def add_spot(self, category, title, description, latitude, longitude):
        """
        Register a new damage location.

        Raises:
            ValidationError: If no point was picked on the map or the title is empty
        """
        lat = parse_coordinate(latitude)
        lon = parse_coordinate(longitude)

        # (0, 0) is what the map picker sends when nothing was selected
        if lat is None or lon is None or lat == 0 or lon == 0:
            raise ValidationError("Please pick a location on the map first", code='location-required')
        if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
            raise ValidationError(f"Coordinates out of range: {lat}, {lon}", code='invalid-coordinates')
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title must not be empty", code='title-required')
        for name, value in (('category', category), ('description', description)):
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"Spot {name} must be text", code='invalid-field')

        spot = self.backend.spots.add(
            category=(category or '').strip(),
            title=title.strip(),
            description=(description or '').strip(),
            latitude=lat,
            longitude=lon,
            status=DEFAULT_SPOT_STATUS
        )
        logger.info(f"Added spot {spot.id} '{spot.title}' at ({lat}, {lon})")
        return spot.to_dict()

    def get_statistics(self):
        """Totals per repair status and per damage category"""
        spots = self.backend.spots.find_all()

        by_status = {label: 0 for label in SPOT_STATUS_LABELS.values()}
        by_status.update(Counter(spot.status_label for spot in spots))
        by_category = Counter(spot.category or UNCATEGORIZED_LABEL for spot in spots)

        return {
            'total': len(spots),
            'by_status': by_status,
            'by_category': dict(by_category)
        }
