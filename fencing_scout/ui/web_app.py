"""
Web application module for the Fencing Scout application.

This module contains the Flask web server exposing the match session as a
JSON API: scoring, action logging, zones, the countdown clock, reports,
analysis and the match archive.
"""
import atexit
import os
from typing import Optional

from flask import Flask, Response, jsonify, request, send_from_directory

from ..errors import MatchError
from ..models import AnalysisReport
from ..services import MatchService, ServiceFactory, SessionIdentity
from ..utils import AppConfig, configure_logging
from ..utils.logging_utils import get_logger

log = get_logger("ui.web_app")


class WebAppState:
    """
    State holder for the web application.
    
    Uses the service factory to build the match service with its
    persistence and clock dependencies.
    """
    
    def __init__(
        self,
        config: Optional[AppConfig] = None,
        match_service: Optional[MatchService] = None,
    ):
        self.service_factory = ServiceFactory(config)
        self.match_service = match_service or self.service_factory.create_match_service()


def _analysis_to_json(report: AnalysisReport) -> dict:
    return {
        "total_events": report.total_events,
        "count_by_action": dict(report.count_by_action),
        "per_zone": {
            zone: {
                "total": breakdown.total,
                "percentage": breakdown.percentage,
                "count_by_action": dict(breakdown.count_by_action),
            }
            for zone, breakdown in report.per_zone.items()
        },
    }


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def create_app(app_state: Optional[WebAppState] = None, static_folder: Optional[str] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.
    
    Args:
        app_state: State holder; a default one is built when omitted
        static_folder: Optional directory containing index.html
        
    Returns:
        Configured Flask application instance
    """
    state = app_state or WebAppState()
    app = Flask(__name__, static_folder=None)
    app.config["APP_STATE"] = state

    def service() -> MatchService:
        return state.match_service

    @app.errorhandler(MatchError)
    def handle_match_error(e: MatchError):
        return jsonify({"success": False, "error": str(e)}), 400

    if static_folder:
        @app.route("/")
        def index():
            """Serve the main HTML interface."""
            response = send_from_directory(static_folder, "index.html")
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            return response

    # ==================== API Endpoints ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Get the live session: scores, names, zones, clock and log view."""
        match_service = service()
        return jsonify({
            "success": True,
            "state": match_service.get_state_data(),
            "log": match_service.analytics_service.log_table(match_service.get_log()),
        })

    @app.route("/api/session", methods=["POST"])
    def bind_session():
        """Attach the user identity and restore any saved match."""
        data = _json_body()
        app_id = str(data.get("app_id") or "").strip()
        user_id = str(data.get("user_id") or "").strip() or "anonymous_user"
        if not app_id:
            return jsonify({"success": False, "error": "app_id is required"}), 400

        restored = service().bind_identity(SessionIdentity(app_id=app_id, user_id=user_id))
        return jsonify({"success": True, "restored": restored, "state": service().get_state_data()})

    @app.route("/api/score", methods=["POST"])
    def adjust_score():
        """Manually correct a score by a signed delta."""
        data = _json_body()
        try:
            delta = int(data.get("delta", 0))
            score = service().adjust_score(data.get("athlete", ""), delta)
        except (TypeError, ValueError) as e:
            return jsonify({"success": False, "error": str(e)}), 400
        return jsonify({"success": True, "score": score, "state": service().get_state_data()})

    @app.route("/api/actions", methods=["POST"])
    def record_action():
        """Log a tactical action in the active zone."""
        data = _json_body()
        try:
            entry = service().record_action(data.get("action", ""))
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        return jsonify({"success": True, "entry": entry.to_json()})

    @app.route("/api/points", methods=["POST"])
    def record_point():
        """Score a point; the clock stops first."""
        data = _json_body()
        try:
            entry = service().record_point(data.get("athlete", ""))
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        return jsonify({"success": True, "entry": entry.to_json(), "state": service().get_state_data()})

    @app.route("/api/zone", methods=["POST"])
    def set_zone():
        data = _json_body()
        service().set_active_zone(data.get("zone", ""))
        return jsonify({"success": True, "state": service().get_state_data()})

    @app.route("/api/zones/invert", methods=["POST"])
    def invert_zones():
        zone_order = service().invert_zones()
        return jsonify({"success": True, "zone_order": zone_order})

    @app.route("/api/athletes", methods=["POST"])
    def rename_athletes():
        """Rename one or both athletes: {"A": "...", "B": "..."}."""
        data = _json_body()
        updates = {athlete: data[athlete] for athlete in ("A", "B") if athlete in data}
        if not updates:
            return jsonify({"success": False, "error": "No athlete names provided"}), 400
        if any(name is not None and not isinstance(name, str) for name in updates.values()):
            return jsonify({"success": False, "error": "Athlete name must be text"}), 400

        names = {
            athlete: service().rename_athlete(athlete, name)
            for athlete, name in updates.items()
        }
        return jsonify({"success": True, "athletes": names})

    @app.route("/api/timer/<command>", methods=["POST"])
    def timer_command(command: str):
        """Start, pause, toggle or reset the countdown."""
        handlers = {
            "start": service().start_clock,
            "pause": service().pause_clock,
            "toggle": service().toggle_clock,
            "reset": service().reset_clock,
        }
        handler = handlers.get(command)
        if handler is None:
            return jsonify({"success": False, "error": f"Unknown timer command: {command}"}), 404
        handler()
        return jsonify({"success": True, "clock": service().timer_service.get_clock_data()})

    @app.route("/api/report", methods=["GET"])
    def get_report():
        """Plain-text scouting report of the current match."""
        return jsonify({"success": True, "report": service().generate_report()})

    @app.route("/api/analysis", methods=["GET"])
    def get_analysis():
        return jsonify({"success": True, "analysis": _analysis_to_json(service().analyze())})

    @app.route("/api/analysis/export", methods=["GET"])
    def export_analysis():
        """Export the analysis as CSV."""
        return Response(
            service().export_analysis_csv(),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=fencing_analysis.csv"},
        )

    @app.route("/api/archive", methods=["GET"])
    def get_archive():
        return jsonify({"success": True, "reports": service().get_archived_reports()})

    @app.route("/api/archive", methods=["POST"])
    def finalize_match():
        """Archive the current match report and start the next match."""
        report = service().finalize_and_advance()
        return jsonify({
            "success": True,
            "report": report,
            "archived_count": len(service().get_archived_reports()),
        })

    @app.route("/api/archive/<int:slot>", methods=["GET"])
    def get_archived_report(slot: int):
        """Get one archived report by 1-based slot number."""
        try:
            report = service().archived_report(slot - 1)
        except IndexError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        return jsonify({"success": True, "slot": slot, "report": report})

    @app.route("/api/reset", methods=["POST"])
    def reset_session():
        """Erase the whole session. Requires {"confirm": true}."""
        data = _json_body()
        if data.get("confirm") is not True:
            return jsonify({
                "success": False,
                "error": "Reset must be confirmed",
                "suggestions": ["Send {\"confirm\": true} to erase all match data"],
            }), 400
        service().full_reset()
        return jsonify({"success": True, "state": service().get_state_data()})

    return app


def run_web_app(config: Optional[AppConfig] = None, static_folder: Optional[str] = None) -> None:
    """
    Run the web application.
    
    Args:
        config: Runtime configuration; read from the environment when omitted
        static_folder: Directory containing static files (HTML, CSS, JS)
    """
    config = config or AppConfig.from_env()
    configure_logging(config.log_level, config.log_file)
    state = WebAppState(config)
    atexit.register(state.match_service.shutdown)
    app = create_app(state, static_folder=static_folder)
    log.info(f"Serving Fencing Scout on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=False)


if __name__ == "__main__":
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    run_web_app(static_folder=project_root)
