import json
import logging
import os

import click
from flask import Flask, jsonify

from config import Config
from models import db
from services.backend import Backend
from services.report_service import ReportService
from services.spot_service import SpotService
from services.user_service import UserService
from services.auth_service import AuthService, ProfileService
from utils.errors import ServiceError

logger = logging.getLogger(__name__)


def create_app(config_overrides=None):
    """Application factory: configuration, database, backend client, services and routes"""
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    ensure_sqlite_directory(app.config['SQLALCHEMY_DATABASE_URI'])

    db.init_app(app)
    with app.app_context():
        db.create_all()

    # One backend client for the whole app, handed to every service
    backend = Backend(db.session)
    app.config['backend'] = backend
    app.config['services'] = {
        'reports': ReportService(backend, radius_meters=app.config['PROXIMITY_RADIUS_METERS']),
        'spots': SpotService(backend),
        'users': UserService(backend),
        'auth': AuthService(backend),
        'profile': ProfileService(backend)
    }

    from routes import setup_routes
    setup_routes(app)

    register_error_handlers(app)
    register_commands(app)

    return app


def ensure_sqlite_directory(uri):
    """Make sure the directory of a file-backed SQLite database exists"""
    prefix = 'sqlite:///'
    if not uri.startswith(prefix) or ':memory:' in uri:
        return
    directory = os.path.dirname(uri[len(prefix):])
    if directory:
        os.makedirs(directory, exist_ok=True)


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def service_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"status": "error", "message": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"status": "error", "message": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error("Unhandled error", exc_info=getattr(error, 'original_exception', None))
        db.session.rollback()
        return jsonify({"status": "error", "message": "Internal server error"}), 500


def register_commands(app):
    @app.cli.command('reset-db')
    def reset_db():
        """Drop and recreate all tables."""
        db.drop_all()
        db.create_all()
        click.echo("Database reset successfully!")

    @app.cli.command('import-reports')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_reports(path):
        """Import report documents from a JSON list."""
        with open(path, 'r') as f:
            documents = json.load(f)

        if not isinstance(documents, list):
            raise click.ClickException("Expected a JSON list of report objects")

        service = app.config['services']['reports']
        imported = 0
        for position, document in enumerate(documents):
            try:
                service.create_report(document)
                imported += 1
            except ServiceError as e:
                click.echo(f"Skipped report #{position}: {e.message}", err=True)

        click.echo(f"Imported {imported} of {len(documents)} reports")

    @app.cli.command('clusters')
    @click.option('--radius', type=float, default=None, help='Clustering radius in meters')
    def show_clusters(radius):
        """Print report clusters, largest first."""
        if radius is not None and radius <= 0:
            raise click.BadParameter('radius must be positive', param_hint='--radius')

        clusters = app.config['services']['reports'].get_clusters(radius)
        if not clusters:
            click.echo("No clusters found")
            return
        for cluster in clusters:
            location = cluster.location
            click.echo(f"{location.label} ({location.latitude}, {location.longitude}): "
                       f"{cluster.count} reports -> {', '.join(map(str, cluster.report_ids()))}")


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
