# Initialize structured logging early
from movielibrary.logging_config import get_logger, configure_structlog
configure_structlog()

from flask import Flask, jsonify
from movielibrary.logging_middleware import init_logging_middleware
from movielibrary.metrics import track_lookup
from movielibrary.projector import filtered, project_card
from movielibrary.routes.api import bp as api_bp, get_current_session
from movielibrary.session_manager import get_session_manager
import os

logger = get_logger(__name__)

app = Flask(__name__)

init_logging_middleware(app)

app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
app.config['PERMANENT_SESSION_LIFETIME'] = get_session_manager().session_timeout
app.json.ensure_ascii = False
app.json.sort_keys = False

app.register_blueprint(api_bp, url_prefix="/api")


@app.route('/health')
def health():
    """Health check endpoint for deployment monitoring."""
    return jsonify({"status": "healthy", "service": "movielibrary"}), 200


@app.route('/')
def index():
    """Filtered listing plus the filter and add-form state needed to render it."""
    session_data = get_current_session()
    movies = filtered(session_data.catalog.all(), session_data.criteria)
    return jsonify({
        "status": "success",
        "movies": [project_card(m) for m in movies],
        "count": len(movies),
        "total": len(session_data.catalog),
        "criteria": session_data.criteria.to_dict(),
        "draft": session_data.draft.to_dict(),
    })


@app.route('/movies/<path:title>')
def movie_detail(title):
    """Detail view for the first movie whose title matches exactly."""
    session_data = get_current_session()
    record = session_data.catalog.find_by_identifier(title)
    track_lookup(record is not None)

    if record is None:
        logger.info("movie_not_found", title=title)
        return jsonify({
            "status": "not_found",
            "title": title,
            "message": "Movie not found.",
        }), 404

    return jsonify({"status": "success", "movie": project_card(record)})


if __name__ == '__main__':
    # Run the server locally on http://127.0.0.1:5000
    app.run(debug=True)
