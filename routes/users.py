from flask import jsonify

from routes import get_service, login_required, users_bp


@users_bp.route('/', methods=['GET'])
@login_required
def get_users():
    return jsonify({"status": "success", "users": get_service('users').list_users()})


@users_bp.route('/<user_id>/block', methods=['POST'])
@login_required
def block_user(user_id):
    user = get_service('users').block_user(user_id)
    return jsonify({"status": "success", "message": "Account blocked", "user": user})
