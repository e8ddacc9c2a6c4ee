from flask import g, jsonify, request, session

from routes import SESSION_KEY, auth_bp, get_service, login_required


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new admin account. The new admin has to log in afterwards."""
    data = request.get_json(silent=True) or {}

    admin = get_service('auth').register(
        data.get('email'),
        data.get('password'),
        data.get('confirm_password'),
        data.get('name'),
        data.get('phone', '')
    )

    return jsonify({
        "status": "success",
        "message": "Registration successful, please log in",
        "admin": admin
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}

    admin = get_service('auth').login(data.get('email'), data.get('password'))
    session.clear()
    session[SESSION_KEY] = admin['uid']

    return jsonify({"status": "success", "admin": admin})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    session.clear()
    return jsonify({"status": "success"})


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    """The admin behind the current session"""
    return jsonify({"status": "success", "admin": g.admin.to_dict()})
