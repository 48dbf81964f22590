"""
Web application module for the Pitchside match recorder.

This module contains the Flask server exposing JSON endpoints for the match
list, the live match screen and the player-select step.
"""
import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..config import Settings
from ..services import (
    MatchController, ServiceFactory, SessionNotInitializedError, UnknownTeamError,
)
from ..utils import APP_TITLE, configure_logging

log = logging.getLogger(__name__)


def create_app(controller: MatchController) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        controller: Controller driving the session this app exposes

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    store = controller.store

    def _not_loaded():
        return jsonify({"success": False, "error": "No match loaded"}), 409

    # ==================== Match selection ==================== #

    @app.route("/api/matches", methods=["GET"])
    def list_matches():
        """List live and scheduled matches."""
        result = controller.list_matches()
        if not result.success:
            return jsonify({"success": False, "error": result.error}), 502
        return jsonify({
            "success": True,
            "matches": [listing.to_dict() for listing in result.data or []],
        })

    @app.route("/api/matches/<match_id>/load", methods=["POST"])
    def load_match(match_id):
        """Load a match into the session; the previous session stays on failure."""
        result = controller.load_match(match_id)
        if not result.success:
            return jsonify({"success": False, "error": result.error, "retryable": True}), 502
        return jsonify({"success": True, "state": result.data})

    # ==================== Live match ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Current read model including formatted elapsed time."""
        if not store.is_initialized:
            return _not_loaded()
        return jsonify({"success": True, "state": store.snapshot()})

    @app.route("/api/clock/toggle", methods=["POST"])
    def toggle_clock():
        """Start or pause the clock; a failed start is reverted."""
        if not store.is_initialized:
            return _not_loaded()
        outcome = controller.toggle_clock()
        body = {
            "success": outcome.success,
            "running": outcome.running,
            "elapsed": store.formatted_elapsed(),
        }
        if not outcome.success:
            body.update({"error": outcome.error, "reverted": outcome.reverted})
            return jsonify(body), 502
        return jsonify(body)

    @app.route("/api/teams/<team_id>/players", methods=["GET"])
    def get_team_players(team_id):
        """Roster for the player-select step."""
        if not store.is_initialized:
            return _not_loaded()
        try:
            roster = store.roster_for(team_id)
        except UnknownTeamError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        return jsonify({"success": True, "players": [p.to_dict() for p in roster]})

    @app.route("/api/events", methods=["POST"])
    def record_event():
        """Record an event locally and sync it.

        The event stands locally even when the sync fails; the response then
        carries ``synced: false`` and the sync error.
        """
        data = request.get_json(silent=True) or {}
        event_type = data.get("type")
        team_id = data.get("team_id")
        player_id = data.get("player_id")
        if not event_type or not team_id or not player_id:
            return jsonify({"success": False, "error": "type, team_id and player_id are required"}), 400

        try:
            outcome = controller.record_event(event_type, team_id, player_id, data.get("minute"))
        except SessionNotInitializedError:
            return _not_loaded()
        except UnknownTeamError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except (TypeError, ValueError) as e:
            return jsonify({"success": False, "error": str(e)}), 400

        return jsonify({
            "success": True,
            "event": outcome.event.to_dict(),
            "synced": outcome.sync.success,
            "sync_error": outcome.sync.error,
            "home_score": store.home_score,
            "away_score": store.away_score,
        }), 201

    @app.route("/api/events/<event_id>/retry", methods=["POST"])
    def retry_event_sync(event_id):
        """Retry syncing an event whose earlier sync failed."""
        result = controller.retry_sync(event_id)
        if not result.success:
            return jsonify({"success": False, "error": result.error}), 400
        return jsonify({"success": True, "sync": store.sync_state(event_id).to_dict()})

    return app


def run_web_app(settings: Optional[Settings] = None) -> None:
    """
    Run the web application.

    Args:
        settings: Runtime settings; read from the environment when omitted
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    controller = ServiceFactory(settings).create_match_controller()
    app = create_app(controller)
    log.info("%s serving on http://%s:%d", APP_TITLE, settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=False)
