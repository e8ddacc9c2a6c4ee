# folium tile map with damage spots and report clusters
import folium
from config import MAP_SETTINGS, SPOT_MARKER_COLORS, DEFAULT_SPOT_STATUS, DEFAULT_PROXIMITY_RADIUS


def initialize_map(center=None, zoom_start=None):
    """
    Initialize a Folium map centered at the given coordinates.

    Args:
        center (tuple): The center of the map (lat, lon). Defaults to Indonesia.
        zoom_start (int): Initial zoom level.

    Returns:
        folium.Map: The initialized map.
    """
    return folium.Map(
        location=center or MAP_SETTINGS['default_center'],
        zoom_start=zoom_start or MAP_SETTINGS['default_zoom']
    )


def add_marker(map_object, location, popup_text="Location", marker_color="blue"):
    """
    Add a marker to the map.

    Args:
        map_object (folium.Map): The map to add the marker to.
        location (tuple): Coordinates (lat, lon).
        popup_text (str): Popup text for the marker.
        marker_color (str): Marker color.
    """
    folium.Marker(location, popup=popup_text, icon=folium.Icon(color=marker_color)).add_to(map_object)


def add_spot_marker(map_object, spot):
    """Add a damage spot, coloured by its repair status"""
    status = spot.get('status') or DEFAULT_SPOT_STATUS
    color = SPOT_MARKER_COLORS.get(status, SPOT_MARKER_COLORS[DEFAULT_SPOT_STATUS])
    popup = f"{spot.get('title', '')} ({spot.get('category') or '-'}): {spot.get('status_label', '')}"
    add_marker(map_object, (spot['latitude'], spot['longitude']), popup, color)


def add_cluster_circle(map_object, cluster, radius_meters=DEFAULT_PROXIMITY_RADIUS, color="blue"):
    """Draw a report cluster as a circle around its seed location"""
    location = cluster.location
    folium.Circle(
        location=(location.latitude, location.longitude),
        radius=radius_meters,
        color=color,
        fill=True,
        fill_opacity=0.3,
        popup=f"{location.label}: {cluster.count} reports"
    ).add_to(map_object)


def build_dashboard_map(spots, clusters, radius_meters=DEFAULT_PROXIMITY_RADIUS, center=None):
    """
    Build the admin dashboard map.

    Args:
        spots (list): Spot dicts with latitude, longitude and status.
        clusters (list): ReportCluster objects to outline.
        radius_meters (float): Radius the clusters were computed with.
        center (tuple): Optional map center (lat, lon).

    Returns:
        folium.Map: The populated map.
    """
    m = initialize_map(center=center)
    for spot in spots:
        add_spot_marker(m, spot)
    for cluster in clusters:
        add_cluster_circle(m, cluster, radius_meters)
    return m


def render_map(map_object):
    """Render a map as a standalone HTML page"""
    return map_object.get_root().render()
