"""
REST API for TransportGraph.

Exposes the core-path analyses as JSON endpoints for the topology front end.
"""

import logging
import time

from flask import Blueprint, Flask, abort, jsonify, request

from ..analysis.analyzer import TopologyAnalyzer
from ..exceptions import InventoryError

logger = logging.getLogger(__name__)


class TransportGraphAPI:
    """
    REST API server for core-path analysis.

    Endpoints:
      GET  /api/v1/health                    — API health check
      GET  /api/v1/primary/<target>          — Shortest routes to the core
      GET  /api/v1/via/<target>/<next_hop>   — Route forced through a neighbor
      POST /api/v1/convergence               — Convergence of several NEs
      GET  /api/v1/lookup?q=<query>          — NE name lookup
    """

    def __init__(self, analyzer: TopologyAnalyzer | None = None):
        self.analyzer = analyzer or TopologyAnalyzer()
        self._started = time.time()

    def create_app(self) -> Flask:
        """Create and configure the Flask application."""
        app = Flask(__name__)
        api = Blueprint("api", __name__, url_prefix="/api/v1")

        @api.errorhandler(InventoryError)
        def inventory_failed(err):
            logger.warning("Inventory unavailable: %s", err)
            return jsonify({"error": str(err)}), 502

        @api.route("/health")
        def health():
            return jsonify({
                "status": "ok",
                "inventory": self.analyzer.loader.source,
                "uptime": time.time() - self._started,
            })

        @api.route("/primary/<target>")
        def primary(target):
            return jsonify(self.analyzer.analyze_primary(target))

        @api.route("/via/<target>/<next_hop>")
        def via(target, next_hop):
            return jsonify(self.analyzer.analyze_via(target, next_hop))

        @api.route("/convergence", methods=["POST"])
        def convergence():
            data = request.get_json(silent=True)
            if not isinstance(data, dict) or not isinstance(data.get("names"), list):
                abort(400, "Request must include a 'names' list")
            names = [str(n) for n in data["names"] if str(n).strip()]
            return jsonify(self.analyzer.analyze_convergence(names))

        @api.route("/lookup")
        def lookup():
            query = request.args.get("q", "").strip()
            if not query:
                abort(400, "Query parameter 'q' is required")
            matches = self.analyzer.lookup(query)
            return jsonify({"query": query, "matches": matches, "count": len(matches)})

        app.register_blueprint(api)
        return app


def run_api(analyzer: TopologyAnalyzer | None = None, host: str = "127.0.0.1",
            port: int = 5000, debug: bool = False):
    """Start the API server."""
    app = TransportGraphAPI(analyzer).create_app()
    app.run(host=host, port=port, debug=debug)
