from flask import jsonify, request

from routes import get_service, login_required, reports_bp
from utils.distance_calculation import parse_coordinate
from utils.errors import ValidationError


def parse_radius(value):
    """Clustering radius from a query string value, None when not given"""
    if value is None or value == '':
        return None
    radius = parse_coordinate(value)
    if radius is None or radius <= 0:
        raise ValidationError(f"Radius must be a positive number of meters, got '{value}'", code='invalid-radius')
    return radius


@reports_bp.route('/', methods=['GET'])
@login_required
def get_reports():
    """All reports, newest first"""
    reports = get_service('reports').list_reports()
    return jsonify({"status": "success", "reports": reports, "total": len(reports)})


@reports_bp.route('/clusters', methods=['GET'])
@login_required
def get_clusters():
    """Groups of reports submitted close to each other"""
    service = get_service('reports')
    radius = parse_radius(request.args.get('radius'))
    clusters = service.get_clusters(radius)

    return jsonify({
        "status": "success",
        "radius_meters": radius if radius is not None else service.radius_meters,
        "clusters": [cluster.to_dict() for cluster in clusters]
    })


@reports_bp.route('/<report_id>', methods=['GET'])
@login_required
def get_report(report_id):
    service = get_service('reports')
    return jsonify({
        "status": "success",
        "report": service.get_report(report_id),
        "actions": service.available_actions(report_id)
    })


@reports_bp.route('/<report_id>/<action>', methods=['POST'])
@login_required
def apply_action(report_id, action):
    """Advance a report through the workflow (verify, complete)"""
    report = get_service('reports').apply_action(report_id, action)
    return jsonify({"status": "success", "report": report})


@reports_bp.route('/<report_id>', methods=['DELETE'])
@login_required
def delete_report(report_id):
    """Delete a report and return the clusters recomputed without it"""
    service = get_service('reports')
    service.delete_report(report_id)

    return jsonify({
        "status": "success",
        "message": "Report deleted",
        "clusters": [cluster.to_dict() for cluster in service.get_clusters()]
    })
