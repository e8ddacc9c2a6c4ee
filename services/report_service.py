import logging
from collections import Counter
from collections.abc import Mapping
from datetime import datetime, timezone

from algorithms.proximity import ProximityClusterer
from config import DEFAULT_PROXIMITY_RADIUS
from models.report import ReportAction, ReportStatus, allowed_actions, next_status
from utils.distance_calculation import parse_coordinate
from utils.errors import InvalidTransitionError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REPORT_FIELDS = ('id', 'report_type', 'description', 'latitude', 'longitude',
                 'status', 'timestamp', 'user_id', 'location', 'image_url')
TEXT_FIELDS = ('report_type', 'description', 'status', 'user_id', 'location', 'image_url')


class ReportService:
    """Report listing, status workflow and proximity clustering"""

    def __init__(self, backend, radius_meters=DEFAULT_PROXIMITY_RADIUS):
        self.backend = backend
        # Rejects a non-positive configured radius when the app starts
        self.clusterer = ProximityClusterer(radius_meters=radius_meters)
        self.radius_meters = radius_meters

    def list_reports(self):
        """All reports as dicts, newest first"""
        return [report.to_dict() for report in self.backend.reports.find_latest_first()]

    def get_report(self, report_id):
        return self._require(report_id).to_dict()

    def create_report(self, data):
        """
        Store a report document. Known fields are mapped onto columns, anything
        else is kept as-is in the report's extra data. Unusable coordinates are
        stored as missing so the report is left out of clustering.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(f"Report must be an object, got {type(data).__name__}", code='invalid-report')

        fields = {key: data[key] for key in REPORT_FIELDS if key in data and data[key] is not None}
        extra = {key: value for key, value in data.items() if key not in REPORT_FIELDS}

        for key in TEXT_FIELDS:
            if key in fields and not isinstance(fields[key], str):
                raise ValidationError(f"Report field '{key}' must be text", code='invalid-field')

        for key in ('latitude', 'longitude'):
            if key in fields:
                parsed = parse_coordinate(fields[key])
                if parsed is None:
                    logger.warning(f"Report {data.get('id')}: unusable {key} {fields[key]!r}, storing as missing")
                fields[key] = parsed

        if 'timestamp' in fields:
            fields['timestamp'] = self._parse_timestamp(fields['timestamp'])
        if 'id' in fields:
            fields['id'] = str(fields['id'])
            if self.backend.reports.get(fields['id']):
                raise ValidationError(f"Report {fields['id']} already exists")

        fields.setdefault('status', ReportStatus.PENDING.value)
        report = self.backend.reports.add(extra=extra, **fields)
        logger.info(f"Created report {report.id}")
        return report.to_dict()

    def apply_action(self, report_id, action):
        """
        Move a report one step along the workflow
        (Menunggu Verifikasi -> Dalam Proses -> Selesai).

        Raises:
            NotFoundError: If the report does not exist
            InvalidTransitionError: If the action is unknown or not valid for the current status
        """
        report = self._require(report_id)

        try:
            action = ReportAction(action)
        except ValueError:
            raise InvalidTransitionError(f"Unknown action '{action}'", code='unknown-action')

        current = ReportStatus.parse(report.status)
        target = next_status(current, action) if current else None
        if target is None:
            logger.warning(f"Rejected '{action.value}' on report {report_id} in status '{report.status}'")
            raise InvalidTransitionError(
                f"Cannot {action.value} a report with status '{report.status}'",
                code='invalid-transition'
            )

        self.backend.reports.update(report, status=target.value)
        logger.info(f"Report {report_id}: '{current.value}' -> '{target.value}'")
        return report.to_dict()

    def available_actions(self, report_id):
        report = self._require(report_id)
        current = ReportStatus.parse(report.status)
        return [action.value for action in allowed_actions(current)] if current else []

    def delete_report(self, report_id):
        report = self._require(report_id)
        self.backend.reports.delete(report)
        logger.info(f"Deleted report {report_id}")

    def get_clusters(self, radius_meters=None):
        """Recompute proximity clusters over the current report list"""
        clusterer = self.clusterer if radius_meters is None else ProximityClusterer(radius_meters=radius_meters)
        return clusterer.cluster(self.list_reports())

    def count_by_status(self):
        return dict(Counter(report.status for report in self.backend.reports.find_all()))

    def _require(self, report_id):
        report = self.backend.reports.get(report_id)
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")
        return report

    @staticmethod
    def _parse_timestamp(value):
        """Accept datetimes, ISO strings and {'seconds': n} exports"""
        if isinstance(value, datetime):
            return value
        if isinstance(value, dict) and 'seconds' in value:
            try:
                return datetime.fromtimestamp(value['seconds'], timezone.utc).replace(tzinfo=None)
            except (TypeError, ValueError, OverflowError, OSError):
                raise ValidationError(f"Invalid timestamp {value!r}")
        if isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value)
            except ValueError:
                raise ValidationError(f"Invalid timestamp '{value}'")
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
            return parsed
        raise ValidationError(f"Invalid timestamp {value!r}")
