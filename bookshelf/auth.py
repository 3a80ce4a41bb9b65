"""Password hashing, signed session tokens and the login guard."""

import logging
from functools import wraps

from flask import current_app, g, redirect, request, url_for
from itsdangerous import BadData, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from .errors import AuthFailure
from .store import get_store

log = logging.getLogger(__name__)

PASSWORD_METHOD = "pbkdf2:sha256:600000"
TOKEN_SALT = "bookshelf.session"


def hash_password(raw):
    return generate_password_hash(raw, method=PASSWORD_METHOD)


def check_password(password_hash, raw):
    if not password_hash or raw is None:
        return False
    return check_password_hash(password_hash, raw)


class SessionAuthenticator:
    """Issues and verifies time-limited tokens of the form ``{"uid": id}``.

    The issue timestamp is signed along with the payload, so expiry needs
    no server-side state.
    """

    def __init__(self, secret_key, max_age=7 * 24 * 60 * 60):
        if not secret_key:
            raise ValueError("secret_key is required")
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)

    def issue(self, user_id):
        return self._serializer.dumps({"uid": user_id})

    def verify(self, token):
        if not token:
            raise AuthFailure("missing token")
        try:
            payload = self._serializer.loads(token, max_age=self.max_age)
        except BadData as exc:
            # covers bad signature, expiry and undecodable payloads alike
            raise AuthFailure("invalid token") from exc
        user_id = payload.get("uid") if isinstance(payload, dict) else None
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthFailure("invalid token payload")
        return user_id


def get_authenticator():
    return current_app.extensions["bookshelf.auth"]


def set_session_cookie(response, token):
    cfg = current_app.config
    response.set_cookie(
        cfg["SESSION_TOKEN_COOKIE"],
        token,
        max_age=cfg["SESSION_TOKEN_MAX_AGE"],
        httponly=True,
        secure=cfg["SESSION_TOKEN_SECURE"],
        samesite="Lax",
    )
    return response


def clear_session_cookie(response):
    cfg = current_app.config
    response.delete_cookie(
        cfg["SESSION_TOKEN_COOKIE"],
        httponly=True,
        secure=cfg["SESSION_TOKEN_SECURE"],
        samesite="Lax",
    )
    return response


def login_required(view):
    """Run ``view`` only for a valid session; otherwise log out and go home.

    The caller's id is exposed as ``g.user_id``.
    """

    @wraps(view)
    def wrapped(*args, **kwargs):
        token = request.cookies.get(current_app.config["SESSION_TOKEN_COOKIE"])
        try:
            user_id = get_authenticator().verify(token)
            if get_store().find_user_by_id(user_id) is None:
                raise AuthFailure("unknown user")
        except AuthFailure as exc:
            log.debug("Rejected session on %s: %s", request.path, exc)
            return clear_session_cookie(redirect(url_for("views.index")))
        g.user_id = user_id
        return view(*args, **kwargs)

    return wrapped
