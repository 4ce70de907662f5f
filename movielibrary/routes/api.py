from flask import Blueprint, request, jsonify, session, Response
from pydantic import ValidationError
from datetime import datetime

from movielibrary.catalog import MissingRequiredFieldError
from movielibrary.logging_config import get_logger
from movielibrary.logging_context import set_session_id
from movielibrary.metrics import (
    get_metrics, track_append_rejected, track_filter_update,
    track_movie_added, update_active_sessions,
)
from movielibrary.projector import project_card
from movielibrary.schemas import DraftUpdate, FilterCriteria
from movielibrary.session_manager import get_session_manager

bp = Blueprint("api", __name__)

logger = get_logger(__name__)


def get_current_session():
    """Get or create the catalog session for the current browser."""
    manager = get_session_manager()
    session_id, session_data = manager.get_or_create_session(session.get('session_id'))
    if session.get('session_id') != session_id:
        session['session_id'] = session_id
        logger.info("session_started", session_id=session_id)
    set_session_id(session_id)
    update_active_sessions(manager.get_active_session_count())
    return session_data


def _json_body():
    """Parsed JSON object from the request, or None if the body is not one."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _bad_request(message, errors=None):
    payload = {"status": "error", "error": message}
    if errors:
        payload["details"] = errors
    return jsonify(payload), 400


@bp.route("/movies", methods=["GET"])
def list_movies():
    """
    GET /api/movies
    Every movie in the session catalog, unfiltered, in insertion order.
    """
    session_data = get_current_session()
    movies = session_data.catalog.all()
    return jsonify({
        "status": "success",
        "count": len(movies),
        "movies": [project_card(m) for m in movies],
    })


@bp.route("/filter", methods=["GET", "PUT"])
def filter_criteria():
    """
    GET /api/filter  - current criteria
    PUT /api/filter  - replace criteria; omitted fields fall back to defaults
    Body: {"titleSubstring": "inter", "minRating": 3}
    """
    session_data = get_current_session()
    if request.method == "GET":
        return jsonify({"status": "success", "criteria": session_data.criteria.to_dict()})

    data = _json_body()
    if data is None:
        return _bad_request("Request body must be a JSON object.")

    try:
        criteria = FilterCriteria.model_validate(data)
    except ValidationError as e:
        logger.info("filter_rejected", errors=e.errors(include_url=False, include_context=False, include_input=False))
        return _bad_request("Invalid filter criteria.", e.errors(include_url=False, include_context=False, include_input=False))

    session_data.set_criteria(criteria)
    track_filter_update()
    logger.info("filter_updated", title_substring=criteria.title_substring, min_rating=criteria.min_rating)
    return jsonify({"status": "success", "criteria": criteria.to_dict()})


@bp.route("/draft", methods=["GET", "PATCH"])
def draft():
    """
    GET   /api/draft - the add-movie form contents
    PATCH /api/draft - update the fields sent, leave the others alone
    """
    session_data = get_current_session()
    if request.method == "GET":
        return jsonify({"status": "success", "draft": session_data.draft.to_dict()})

    data = _json_body()
    if data is None:
        return _bad_request("Request body must be a JSON object.")

    try:
        update = DraftUpdate.model_validate(data)
    except ValidationError as e:
        return _bad_request("Invalid draft fields.", e.errors(include_url=False, include_context=False, include_input=False))

    update.apply_to(session_data.draft)
    session_data.touch()
    return jsonify({"status": "success", "draft": session_data.draft.to_dict()})


@bp.route("/draft/submit", methods=["POST"])
def submit_draft():
    """
    POST /api/draft/submit
    Append the draft to the catalog and clear it.

    A draft without a title or poster URL is ignored: the catalog and the
    draft stay as they are and no error is shown to the user.
    """
    session_data = get_current_session()
    try:
        record = session_data.catalog.append(session_data.draft)
    except MissingRequiredFieldError as e:
        track_append_rejected(e.fields)
        logger.info("draft_rejected", missing_fields=e.fields)
        return jsonify({
            "status": "success",
            "added": False,
            "draft": session_data.draft.to_dict(),
        })

    track_movie_added()
    session_data.touch()
    return jsonify({
        "status": "success",
        "added": True,
        "movie": project_card(record),
        "draft": session_data.draft.to_dict(),
        "count": len(session_data.catalog),
    })


@bp.route("/session/timeout", methods=["GET"])
def session_timeout_info():
    """
    GET /api/session/timeout
    How long the current catalog will be kept before it expires.
    """
    manager = get_session_manager()
    timeout_seconds = int(manager.session_timeout.total_seconds())
    session_id = session.get('session_id')
    session_data = manager.peek_session(session_id) if session_id else None

    if not session_data:
        return jsonify({
            "status": "success",
            "session_exists": False,
            "timeout_seconds": timeout_seconds,
            "remaining_seconds": timeout_seconds,
            "message": "No active session",
        })

    elapsed = (datetime.now() - session_data.last_accessed).total_seconds()
    remaining = max(0, timeout_seconds - elapsed)

    return jsonify({
        "status": "success",
        "session_exists": True,
        "timeout_seconds": timeout_seconds,
        "remaining_seconds": int(remaining),
        "last_accessed": session_data.last_accessed.isoformat(),
    })


@bp.route("/metrics", methods=["GET"])
def metrics():
    """
    GET /api/metrics
    Expose Prometheus metrics for monitoring.
    """
    update_active_sessions(get_session_manager().get_active_session_count())
    metrics_text, content_type = get_metrics()
    return Response(metrics_text, mimetype=content_type)
