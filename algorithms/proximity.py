from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from config import DEFAULT_PROXIMITY_RADIUS
from utils.distance_calculation import haversine_distance, coordinates_of


@dataclass
class ClusterLocation:
    """Representative point of a cluster, taken from its seed report"""
    latitude: float
    longitude: float
    label: str


@dataclass
class ReportCluster:
    """A group of reports lying within the proximity radius of a seed report"""
    location: ClusterLocation
    reports: List[Mapping[str, Any]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.reports)

    def report_ids(self) -> List[Any]:
        return [report.get('id') for report in self.reports]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'location': {
                'latitude': self.location.latitude,
                'longitude': self.location.longitude,
                'label': self.location.label
            },
            'reports': [dict(report) for report in self.reports],
            'count': self.count
        }


class ProximityClusterer:
    """
    Groups geo-tagged reports that sit close to each other on the ground.

    Clustering is seed-and-sweep: each unassigned report in input order seeds a
    candidate cluster and sweeps in every other unassigned report within
    radius_meters of the seed (haversine distance). Clusters are therefore
    star-shaped around their seed; two members are only guaranteed to be near
    the seed, not near each other.
    """

    def __init__(self, radius_meters: float = DEFAULT_PROXIMITY_RADIUS):
        """
        Args:
            radius_meters: Maximum seed-to-member distance, inclusive
        """
        if radius_meters <= 0:
            raise ValueError(f"radius_meters must be positive, got {radius_meters}")
        self.radius_meters = radius_meters

    def cluster(self, reports: Sequence[Mapping[str, Any]]) -> List[ReportCluster]:
        """
        Cluster the reports and return every group of two or more members,
        largest first. Reports whose latitude or longitude is missing or unparseable
        are ignored. The input reports are never modified.
        """
        points: List[Optional[Tuple[float, float]]] = [coordinates_of(report) for report in reports]
        assigned = set()
        clusters: List[ReportCluster] = []

        for i, seed in enumerate(reports):
            seed_point = points[i]
            if seed_point is None or i in assigned:
                continue

            members = [seed]
            for j, other in enumerate(reports):
                if j == i or points[j] is None or j in assigned:
                    continue
                if haversine_distance(seed_point, points[j]) <= self.radius_meters:
                    members.append(other)
                    assigned.add(j)

            # A lone seed stays unassigned so a later seed can still sweep it in
            if len(members) < 2:
                continue

            assigned.add(i)
            clusters.append(ReportCluster(
                location=ClusterLocation(
                    latitude=seed_point[0],
                    longitude=seed_point[1],
                    label=self._label_for(seed)
                ),
                reports=members
            ))

        # sorted() is stable, so equal-sized clusters keep discovery order
        return sorted(clusters, key=lambda c: c.count, reverse=True)

    @staticmethod
    def _label_for(report):
        """Display label of a report: its place name, falling back to the report type"""
        label = report.get('location') or report.get('report_type') or report.get('id')
        return '' if label is None else str(label)


def cluster_reports(reports, radius_meters=DEFAULT_PROXIMITY_RADIUS):
    """Convenience wrapper around ProximityClusterer.cluster"""
    return ProximityClusterer(radius_meters=radius_meters).cluster(reports)
