from flask import jsonify, request

from routes import get_service, login_required, spots_bp


@spots_bp.route('/', methods=['GET'])
@login_required
def get_spots():
    spots = get_service('spots').list_spots()
    return jsonify({"status": "success", "spots": spots})


@spots_bp.route('/', methods=['POST'])
@login_required
def add_spot():
    """Register a damage location picked on the map"""
    data = request.get_json(silent=True) or {}

    spot = get_service('spots').add_spot(
        data.get('category'),
        data.get('title'),
        data.get('description'),
        data.get('latitude'),
        data.get('longitude')
    )

    return jsonify({
        "status": "success",
        "message": f"Location \"{spot['title']}\" added",
        "spot": spot
    }), 201


@spots_bp.route('/stats', methods=['GET'])
@login_required
def get_stats():
    return jsonify({"status": "success", **get_service('spots').get_statistics()})
