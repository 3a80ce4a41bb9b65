import logging

from flask import Flask, redirect, url_for
from werkzeug.exceptions import HTTPException

from .auth import SessionAuthenticator
from .catalog import CatalogClient
from .config import Config
from .logging_setup import configure_logging
from .models import db
from .store import CredentialStore
from .views import bp as views_bp

log = logging.getLogger(__name__)


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"])

    db.init_app(app)
    # Create DB tables
    with app.app_context():
        db.create_all()

    app.extensions["bookshelf.store"] = CredentialStore()
    app.extensions["bookshelf.auth"] = SessionAuthenticator(
        app.config["SECRET_KEY"], max_age=app.config["SESSION_TOKEN_MAX_AGE"]
    )
    app.extensions["bookshelf.catalog"] = CatalogClient(
        search_url=app.config["CATALOG_SEARCH_URL"],
        cover_url=app.config["CATALOG_COVER_URL"],
        timeout=app.config["CATALOG_TIMEOUT"],
    )

    app.register_blueprint(views_bp)
    app.register_error_handler(Exception, _handle_unexpected)
    return app


def _handle_unexpected(exc):
    if isinstance(exc, HTTPException):
        return exc
    log.exception("Unhandled error, sending user to the landing page")
    db.session.rollback()
    return redirect(url_for("views.index"))


if __name__ == "__main__":
    create_app().run(debug=True)
