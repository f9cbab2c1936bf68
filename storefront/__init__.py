import os
import logging
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_caching import Cache
from flask_login import LoginManager

cache = Cache()
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()

def create_app(test_config=None):
    app = Flask(__name__, instance_relative_config=True)

    basedir = os.path.abspath(os.path.dirname(__file__))
    instance_dir = os.path.join(os.path.dirname(basedir), 'instance')
    db_path = os.path.join(instance_dir, 'storefront.db')
    secret_key = os.environ.get('SECRET_KEY', 'dev-secret-key')

    app.config.from_mapping(
        SECRET_KEY=secret_key,
        SQLALCHEMY_DATABASE_URI=os.environ.get('DATABASE_URL', f'sqlite:///{db_path}'),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        # The web server and the report command must share one cache backend
        CACHE_TYPE=os.environ.get('CACHE_TYPE', 'FileSystemCache'),
        CACHE_DIR=os.environ.get('CACHE_DIR', os.path.join(instance_dir, 'cache')),
        CACHE_DEFAULT_TIMEOUT=900,
        JWT_SECRET_KEY=os.environ.get('JWT_SECRET_KEY', secret_key),
        JWT_ALGORITHM='HS256',
        JWT_EXPIRATION_SECONDS=86400,
        LOG_LEVEL=os.environ.get('LOG_LEVEL', 'INFO'),
    )

    if test_config is not None:
        app.config.from_mapping(test_config)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    migrate.init_app(app, db)
    cache.init_app(app)
    login_manager.init_app(app)

    # Import models here *after* db init_app to avoid circular imports
    from storefront.models import User
    from storefront.security import extract_username, TokenError

    @login_manager.request_loader
    def load_user_from_request(request):
        header = request.headers.get('Authorization')
        if not header:
            return None
        try:
            username = extract_username(header)
        except TokenError as e:
            logging.info(f"Rejected bearer token: {e}")
            return None
        user = User.query.filter_by(username=username).first()
        if user is None or not user.active:
            return None
        return user

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    register_error_handlers(app)

    # Import and register blueprints here
    from storefront.auth import auth
    from storefront.routes import main

    app.register_blueprint(auth)
    app.register_blueprint(main)

    from storefront.commands import generate_reports_command
    app.cli.add_command(generate_reports_command)

    return app


def register_error_handlers(app):
    from storefront.exceptions import ServiceError

    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        return jsonify({'error': e.message}), e.status_code

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'error': 'Method not allowed'}), 405
