"""Public pages blueprint."""

from flask import Blueprint, redirect, url_for

pages_bp = Blueprint("pages", __name__)


@pages_bp.route("/")
def home():
    """Home page redirects to the task form."""
    return redirect(url_for("tasks.create_form"))
