"""The web application: routes, CORS and the command that serves it."""

from __future__ import annotations

import argparse
from pathlib import Path

from flask import Flask, Response, request

from .config import get_config, load_config
from .email_api import email_blueprint
from .email_service import EmailService
from .finance_api import finance_blueprint
from .finance_service import FinanceService
from .storage import FileFinanceStorage, FileUserStorage
from .user_api import user_blueprint
from .user_service import UserService

API_PREFIX = "/api/v1"
DEFAULT_PORT = 8081
ALLOWED_ORIGINS = ("http://localhost:8080",)
ALLOWED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")
ALLOWED_HEADERS = ("Origin", "Content-Length", "Content-Type", "Authorization")
CORS_MAX_AGE_SECONDS = 12 * 60 * 60


def _install_cors(app: Flask) -> None:
    def cross_origin() -> str | None:
        origin = request.headers.get("Origin")
        if not origin or origin == f"{request.scheme}://{request.host}":
            return None
        return origin

    @app.before_request
    def check_origin():
        origin = cross_origin()
        if origin is None:
            return None
        if origin not in ALLOWED_ORIGINS:
            return Response(status=403)
        if request.method == "OPTIONS":
            response = Response(status=204)
            response.headers["Access-Control-Allow-Methods"] = ",".join(ALLOWED_METHODS)
            response.headers["Access-Control-Allow-Headers"] = ",".join(ALLOWED_HEADERS)
            response.headers["Access-Control-Max-Age"] = str(CORS_MAX_AGE_SECONDS)
            return response
        return None

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        origin = cross_origin()
        if origin is not None and origin in ALLOWED_ORIGINS:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.vary.add("Origin")
        return response


def create_app(
    finance_service: FinanceService,
    user_service: UserService,
    email_service: EmailService,
) -> Flask:
    """Assemble the application around the given services."""
    app = Flask("myfinance")
    _install_cors(app)
    app.register_blueprint(finance_blueprint(finance_service), url_prefix=API_PREFIX)
    app.register_blueprint(user_blueprint(user_service), url_prefix=API_PREFIX)
    app.register_blueprint(email_blueprint(email_service), url_prefix=API_PREFIX)
    return app


def build_services(
    data_dir: str | Path | None = None,
) -> tuple[FinanceService, UserService, EmailService]:
    """Create the services backed by JSON files in ``data_dir`` (default: ~/myfinance)."""
    finance_service = FinanceService(FileFinanceStorage("finances.json", data_dir))
    user_service = UserService(FileUserStorage("users.json", data_dir))
    smtp = get_config().smtp
    email_service = EmailService(smtp.host, smtp.port, smtp.username, smtp.password)
    return finance_service, user_service, email_service


def main(argv: list[str] | None = None) -> int:
    """Serve the API until interrupted."""
    parser = argparse.ArgumentParser(prog="myfinance", description="Personal finance REST API.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument("--data-dir", default=None, help="directory holding the JSON data files")
    parser.add_argument("--config", default=None, help="YAML file with SMTP settings")
    args = parser.parse_args(argv)

    finance_service, user_service, email_service = build_services(args.data_dir)
    if args.config:
        smtp = load_config(args.config).smtp
        email_service = EmailService(smtp.host, smtp.port, smtp.username, smtp.password)

    app = create_app(finance_service, user_service, email_service)
    app.run(host=args.host, port=args.port)
    return 0