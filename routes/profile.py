from flask import g, jsonify, request

from routes import get_service, login_required, profile_bp


@profile_bp.route('/', methods=['GET'])
@login_required
def get_profile():
    return jsonify({"status": "success", "profile": get_service('profile').get_profile(g.admin.uid)})


@profile_bp.route('/', methods=['PUT'])
@login_required
def update_profile():
    """Update name, email and phone number of the signed-in admin"""
    data = request.get_json(silent=True) or {}

    profile = get_service('profile').update_profile(
        g.admin.uid,
        name=data.get('name'),
        email=data.get('email'),
        no_phone=data.get('no_phone')
    )

    return jsonify({"status": "success", "message": "Profile updated", "profile": profile})
