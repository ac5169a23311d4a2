import os
import logging
from flask import Flask
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

from .config import DevConfig, ProdConfig, TestConfig, env_overrides, load_environment

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()

CONFIGS = {
    'development': DevConfig,
    'production': ProdConfig,
    'testing': TestConfig,
}


def create_app(config_name: str | None = None) -> Flask:
    """Application factory with environment based configuration."""
    env_vars = load_environment()

    app = Flask(__name__, instance_relative_config=True)
    os.makedirs(app.instance_path, exist_ok=True)

    # Pick configuration; tests run isolated from the environment
    env = config_name or env_vars.get('ENV') or env_vars.get('FLASK_ENV') or 'production'
    app.config.from_object(CONFIGS.get(env, ProdConfig))
    if not app.testing:
        app.config.update(env_overrides(env_vars))
    if not app.config.get('INVOICE_STORAGE_DIR'):
        app.config['INVOICE_STORAGE_DIR'] = os.path.join(app.instance_path, 'invoices')

    # Initialise logging
    logging.basicConfig(level=logging.DEBUG if app.debug else logging.INFO)

    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app, origins=app.config['CORS_ORIGINS'])

    # Ensure models loaded so tables can be created
    from printshop import models  # noqa
    with app.app_context():
        db.create_all()

    from printshop.errors import register_error_handlers
    from printshop.storage import init_storage

    register_error_handlers(app)
    init_storage(app)

    @app.route('/')
    def index():
        return 'Backend is working!'

    @app.route('/favicon.ico')
    def favicon():
        return '', 204

    from printshop.catalog.routes import bp as catalog_bp
    from printshop.customers.routes import bp as customers_bp
    from printshop.estimates.routes import bp as estimates_bp
    from printshop.invoices.routes import bp as invoices_bp, files_bp as invoice_files_bp
    from printshop.cli import catalog_cli

    app.register_blueprint(catalog_bp, url_prefix='/api')
    app.register_blueprint(customers_bp, url_prefix='/api/customers')
    app.register_blueprint(estimates_bp, url_prefix='/api/estimates')
    app.register_blueprint(invoices_bp, url_prefix='/api/invoices')
    app.register_blueprint(invoice_files_bp, url_prefix='/invoices')
    app.cli.add_command(catalog_cli)

    return app
