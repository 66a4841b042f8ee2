import logging
from pathlib import Path

import click
from flask import Flask, current_app, flash, jsonify, redirect, request, url_for
from flask.cli import with_appcontext
from werkzeug.exceptions import RequestEntityTooLarge

from passport_registry.config import load_config
from passport_registry.database.db_manager import DBManager
from passport_registry.models.daos.passport_dao import PassportDAO
from passport_registry.routes.api_routes import api_bp
from passport_registry.routes.passport_routes import passports_bp
from passport_registry.services.passport_service import PassportService
from passport_registry.storage.photo_storage import PhotoStorage
from passport_registry.utils.formatting import fr_date, iso_date

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / 'database' / 'schema.sql'


def create_app(config=None, db_manager=None):
    """Builds the Flask application and wires DAO, photo bucket and service."""
    config = config or load_config()

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config['MAX_CONTENT_LENGTH'] = config.max_content_length
    app.config['MAX_UPLOAD_MB'] = config.max_upload_mb

    # Attach the collaborators to the app so the blueprints reach them via current_app
    app.db_manager = db_manager or DBManager(config)
    photo_storage = PhotoStorage(config.upload_folder, config.photo_bucket,
                                 config.allowed_photo_extensions)
    app.passport_service = PassportService(PassportDAO(app.db_manager), photo_storage)

    app.jinja_env.filters['fr_date'] = fr_date
    app.jinja_env.filters['iso_date'] = iso_date

    app.register_blueprint(passports_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    app.register_error_handler(RequestEntityTooLarge, _handle_too_large)
    app.cli.add_command(init_db_command)

    logger.debug("Application created (db=%s, bucket=%s)", config.db_name, photo_storage.bucket_path)
    return app


def _handle_too_large(error):
    message = f"Fichier trop volumineux (max {current_app.config['MAX_UPLOAD_MB']}MB)"
    if request.path.startswith('/api/'):
        return jsonify({'error': message}), 413
    flash(message, 'danger')
    return redirect(url_for('passports.create_passport'))


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the passports table."""
    count = current_app.db_manager.execute_sql_script(SCHEMA_PATH)
    click.echo(f"Executed {count} SQL statements from {SCHEMA_PATH.name}")
