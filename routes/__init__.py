from functools import wraps

from flask import Blueprint, current_app, g, jsonify, session

# Create blueprints
main_bp = Blueprint('main', __name__)
auth_bp = Blueprint('auth', __name__, url_prefix='/auth')
reports_bp = Blueprint('reports', __name__, url_prefix='/reports')
spots_bp = Blueprint('spots', __name__, url_prefix='/spots')
users_bp = Blueprint('users', __name__, url_prefix='/users')
profile_bp = Blueprint('profile', __name__, url_prefix='/profile')

all_blueprints = [main_bp, auth_bp, reports_bp, spots_bp, users_bp, profile_bp]

SESSION_KEY = 'admin_uid'


def get_service(name):
    """Service instance wired up by the application factory"""
    return current_app.config['services'][name]


def login_required(view):
    """Reject the request with 401 unless an admin is signed in"""
    @wraps(view)
    def wrapped(*args, **kwargs):
        admin = get_service('auth').get_admin(session.get(SESSION_KEY))
        if admin is None:
            session.pop(SESSION_KEY, None)
            return jsonify({"status": "error", "message": "Login required", "code": "unauthenticated"}), 401
        g.admin = admin
        return view(*args, **kwargs)
    return wrapped


def setup_routes(app):
    # Import route modules so their handlers attach to the blueprints
    from routes import main, auth, reports, spots, users, profile

    for blueprint in all_blueprints:
        app.register_blueprint(blueprint)
