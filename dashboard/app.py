"""Flask application serving derived publishing status to the dashboard."""

from __future__ import annotations

import logging

from flask import Flask, jsonify

from .backend import BackendClient
from .cors import install_cors
from .routes import blueprint as publishing_blueprint
from .settings import DashboardSettings, load_settings

settings: DashboardSettings = load_settings()

app = Flask(__name__)

handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
app.logger.setLevel(settings.log_level)
app.logger.addHandler(handler)
app.logger.info("Using asset backend at %s", settings.backend.base_url)

app.config["PUBLISHING_BACKEND"] = BackendClient(settings.backend, logger=app.logger)
app.register_blueprint(publishing_blueprint)
install_cors(app, settings.cors)


@app.get("/health")
def health():
    return jsonify({"status": "ok"}), 200
