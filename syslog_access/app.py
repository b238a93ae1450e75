"""Demo Flask application with syslog access logging installed."""

from flask import Flask, jsonify

from syslog_access.extension import EXTENSION_KEY, SysLogTrace


def create_app(syslog_section: dict | None = None) -> Flask:
    """Flask application factory."""
    app = Flask(__name__)
    app.config["SYSLOG"] = syslog_section or {}
    SysLogTrace(app)

    @app.route("/")
    def index():
        return jsonify(message="hello")

    @app.route("/health")
    def health():
        settings = app.extensions[EXTENSION_KEY].settings
        return jsonify(
            status="ok",
            ident=settings.ident,
            access_log_facility=settings.access_log_facility,
            error_log_facility=settings.error_log_facility,
            priority=settings.priority,
        )

    return app
