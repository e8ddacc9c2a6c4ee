from flask import jsonify

from routes import get_service, login_required, main_bp
from visualization import build_dashboard_map, render_map


@main_bp.route('/health')
def health():
    return jsonify({"status": "healthy", "service": "damage-report-admin"})


@main_bp.route('/')
@login_required
def dashboard():
    """Dashboard summary: spot statistics, report workflow counts and cluster count"""
    reports = get_service('reports')
    clusters = reports.get_clusters()

    return jsonify({
        "status": "success",
        "spots": get_service('spots').get_statistics(),
        "reports": reports.count_by_status(),
        "clusters": len(clusters)
    })


@main_bp.route('/map')
@login_required
def damage_map():
    """Tile map with damage spots coloured by repair status and report clusters"""
    reports = get_service('reports')
    m = build_dashboard_map(
        get_service('spots').list_spots(),
        reports.get_clusters(),
        radius_meters=reports.radius_meters
    )
    return render_map(m)
