import logging

import click
from flask import Flask

from config import Config
from models import store
from routes import auth_bp, records_bp, views_bp
from utils.errors import StoreError, register_error_handlers

TABLES = ("users", "audit")

logger = logging.getLogger(__name__)


def _configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(overrides=None):
    overrides = dict(overrides or {})
    static_dir = overrides.get("STATIC_DIR", Config.STATIC_DIR)

    app = Flask(__name__, static_folder=static_dir, static_url_path="")
    app.config.from_object(Config)
    app.config.update(overrides)

    _configure_logging(app.config["LOG_LEVEL"])

    # Register routes
    app.register_blueprint(auth_bp)
    app.register_blueprint(records_bp)
    app.register_blueprint(views_bp)

    register_error_handlers(app)

    # Record store init
    store.init_app(app)

    # Create both table files at startup (idempotent)
    with app.app_context():
        for table in TABLES:
            store.initialize(table)

    @app.after_request
    def add_cors_and_security_headers(resp):
        resp.headers["Access-Control-Allow-Origin"] = app.config.get("CORS_ORIGIN", "*")
        resp.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        resp.headers["Access-Control-Allow-Headers"] = "Content-Type"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "no-referrer"
        return resp

    register_cli(app)

    return app

#-------------------------

def register_cli(app):
    @app.cli.command("init-store")
    def init_store():
        """Create the users and audit table files with their header row."""
        for table in TABLES:
            path = store.initialize(table)
            click.echo(f"{table}: {path}")

    @app.cli.command("show-table")
    @click.argument("table", type=click.Choice(TABLES))
    def show_table(table):
        """Print every parsed row of a table."""
        try:
            records = store.load_all(table)
        except StoreError as exc:
            raise click.ClickException(exc.message)

        for r in records:
            click.echo(f"{r.id}\t{r.email}\t{r.fullName}\t{r.username}\t{r.password}\t{r.birthday}")
        click.echo(f"Total: {len(records)}")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    logger.info("Server running on http://%s:%s", app.config["HOST"], app.config["PORT"])
    # Run locally
    app.run(host=app.config["HOST"], port=app.config["PORT"])
