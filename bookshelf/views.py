import logging

from flask import Blueprint, current_app, flash, g, redirect, render_template, request, url_for

from .auth import (
    check_password,
    clear_session_cookie,
    get_authenticator,
    hash_password,
    login_required,
    set_session_cookie,
)
from .catalog import paginate
from .errors import Conflict, ValidationError
from .store import get_store

log = logging.getLogger(__name__)

bp = Blueprint("views", __name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_INPUT = "Invalid input"
ACCOUNT_CREATED = "Account created. Please log in."


def get_catalog():
    return current_app.extensions["bookshelf.catalog"]


def _parse_index(raw):
    try:
        return max(0, int(raw))
    except (TypeError, ValueError):
        return 0


def _normalize_username(raw):
    return (raw or "").strip()


def _validate_sign_up(form):
    username = _normalize_username(form.get("Username"))
    password = form.get("Password") or ""
    if not username or not password or password != form.get("confirmPassword"):
        raise ValidationError(INVALID_INPUT)
    return username, password


# ---------------- ROUTES ---------------- #

# Home page - list every registered user
@bp.route("/")
def index():
    rows = get_store().list_all_usernames(display=False)
    response = current_app.make_response(render_template("index.html", rows=rows))
    return clear_session_cookie(response)


# User login
@bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return render_template("login.html")

    username = _normalize_username(request.form.get("Username"))
    password = request.form.get("Password", "")

    user = get_store().find_user_by_username(username)
    if user is None or not check_password(user.password, password):
        log.info("Failed login for username=%s", username)
        return render_template("login.html", error=INVALID_CREDENTIALS)

    token = get_authenticator().issue(user.id)
    log.info("User id=%s logged in", user.id)
    return set_session_cookie(redirect(url_for("views.profile")), token)


# User registration
@bp.route("/signUp", methods=["GET", "POST"])
def sign_up():
    if request.method == "GET":
        return render_template("signUp.html")

    try:
        username, password = _validate_sign_up(request.form)
        get_store().create_user(username, hash_password(password))
    except (ValidationError, Conflict) as exc:
        return render_template("signUp.html", error=str(exc))

    return render_template("login.html", message=ACCOUNT_CREATED)


# My Books page - only the logged-in user's books
@bp.route("/profile")
@login_required
def profile():
    store = get_store()
    user = store.find_user_by_id(g.user_id)
    books = store.list_books_by_owner(g.user_id)
    return render_template(
        "profile.html",
        listTitle=f"{user.username}'s Books",
        listItems=books,
        editable=True,
    )


# Public profile of another user, exact name first, then ignoring case
@bp.route("/profileView", methods=["POST"])
def profile_view():
    name = (request.form.get("user") or "").strip()
    store = get_store()
    user = store.find_user_by_username(name) or store.find_user_by_username(name, fuzzy=True)
    if user is None:
        return render_template("profileView.html", listTitle="No Books", listItems=[])

    return render_template(
        "profileView.html",
        listTitle=f"{user.username}'s Books",
        listItems=store.list_books_by_owner(user.id),
    )


# Catalog search, one page at a time
@bp.route("/search", methods=["POST"])
def search():
    book_title = request.form.get("bookTitle", "")
    book_author = request.form.get("bookAuthor", "")
    index = _parse_index(request.form.get("index"))

    results = get_catalog().search(title=book_title, author=book_author)
    page = paginate(results, index, current_app.config["PAGE_SIZE"])

    return render_template(
        "bookSelection.html",
        books=page.items,
        page=page,
        bookTitle=book_title,
        bookAuthor=book_author,
    )


# Add a book to the caller's collection
@bp.route("/addBook", methods=["POST"])
@login_required
def add_book():
    title = (request.form.get("title") or "").strip()
    if not title:
        flash(INVALID_INPUT)
        return redirect(url_for("views.profile"))

    # owner always comes from the session, never from the form
    get_store().add_book(
        g.user_id,
        title,
        request.form.get("author", ""),
        request.form.get("coverUrl", ""),
    )
    return redirect(url_for("views.profile"))


# Remove every matching book from the caller's collection
@bp.route("/deleteBook", methods=["POST"])
@login_required
def delete_book():
    removed = get_store().delete_books(
        g.user_id,
        request.form.get("title", ""),
        request.form.get("author", ""),
    )
    log.debug("User id=%s removed %d book(s)", g.user_id, removed)
    return redirect(url_for("views.profile"))


# Logout
@bp.route("/logout")
def logout():
    return clear_session_cookie(redirect(url_for("views.index")))
