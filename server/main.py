from flask import Flask, request, jsonify
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from flask_cors import CORS
from flask_jwt_extended import (
    JWTManager,
    create_access_token,
    get_jwt_identity,
    jwt_required,
)
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Obtener el directorio raíz del proyecto
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from server.config import SERVER_HOST, SERVER_PORT
from server.errors import NonIntegerResultError, ReconstructionError
from server.shamir_core import reconstruct, select_shares
from server.share_document import load_share_document

# los secretos se devuelven en decimal y pueden ser muy largos
if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)

app = Flask(__name__)

app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "change-this-in-prod")
app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
    minutes=int(os.getenv("JWT_EXPIRES_MINUTES", "15"))
)
jwt = JWTManager(app)

frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://127.0.0.1:5000")
CORS(
    app,
    resources={"/api/*": {"origins": frontend_origin}},
    supports_credentials=False,
    expose_headers=["Content-Type"],
    allow_headers=["Content-Type", "Authorization"],
)

limiter_enabled = os.getenv("LIMITER_ENABLED", "true").lower() in {"1", "true", "yes"}
limiter_rate = os.getenv("LIMITER_DEFAULT_RATE", "60 per minute")
if limiter_enabled:
    limiter = Limiter(
        get_remote_address,
        app=app,
        default_limits=[limiter_rate],
        storage_uri="memory://",
    )
else:
    limiter = Limiter(get_remote_address, app=app, enabled=False)


def json_object_body():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def rate_limit_per_user():
    username = json_object_body().get("username")
    username = username.strip().lower() if isinstance(username, str) else ""
    if username:
        return f"user:{username}"
    return f"ip:{get_remote_address()}"


@app.errorhandler(429)
def handle_rate_limit(exc):
    return jsonify({"error": "Límite de solicitudes excedido. Intenta nuevamente más tarde."}), 429


@app.errorhandler(ReconstructionError)
def handle_reconstruction_error(exc):
    body = {"error": str(exc), "kind": type(exc).__name__}
    if isinstance(exc, NonIntegerResultError):
        body["fraction"] = str(exc.fraction)
    return jsonify(body), 422


USE_SSL = os.getenv("USE_SSL", "false").lower() in {"1", "true", "yes"}
SSL_CERT_PATH = Path(os.getenv("SSL_CERT_PATH", str(Path(project_root) / "cert.pem"))).expanduser()
SSL_KEY_PATH = Path(os.getenv("SSL_KEY_PATH", str(Path(project_root) / "key.pem"))).expanduser()

AUTH_USERNAME = os.getenv("AUTH_USERNAME", "admin")
AUTH_PASSWORD = os.getenv("AUTH_PASSWORD", "changeme")


def log_reconstruction(user, threshold, used):
    received_at = datetime.now(timezone.utc).isoformat()
    # nunca se registra el secreto
    print(f"[{received_at}] Reconstrucción solicitada por {user} (k={threshold})")
    print("   Coordenadas x usadas:", [share.x for share in used])


@app.route("/api/auth/login", methods=["POST"])
@limiter.limit("10 per minute")
@limiter.limit("5 per minute", key_func=rate_limit_per_user)
def login():
    payload = json_object_body()
    username = payload.get("username")
    password = payload.get("password")

    if not isinstance(username, str) or not isinstance(password, str):
        return jsonify({"error": "Credenciales inválidas."}), 401

    username = username.strip()
    if not username or not password:
        return jsonify({"error": "Credenciales inválidas."}), 401

    if username != AUTH_USERNAME or password != AUTH_PASSWORD:
        return jsonify({"error": "Credenciales inválidas."}), 401

    token = create_access_token(identity=username)
    expires_minutes = int(app.config["JWT_ACCESS_TOKEN_EXPIRES"].total_seconds() // 60)
    return jsonify({"access_token": token, "expires_in_minutes": expires_minutes})


@app.route("/api/reconstruct", methods=["POST"])
@jwt_required()
@limiter.limit("30 per minute")
def reconstruct_secret():
    content = request.get_json(silent=True)

    if not isinstance(content, dict):
        return jsonify({"error": "El cuerpo debe ser un objeto JSON."}), 400
    if "document" not in content:
        return jsonify({"error": "Falta el campo 'document'."}), 400

    positions = content.get("positions")
    if positions is not None and not isinstance(positions, list):
        return jsonify({"error": "'positions' debe ser una lista o null."}), 400

    # los errores de la taxonomía los traduce handle_reconstruction_error
    share_set = load_share_document(content["document"])
    used = select_shares(share_set, positions)
    secret = reconstruct(used)

    user = get_jwt_identity()
    log_reconstruction(user, share_set.threshold, used)

    return jsonify({
        "secret": str(secret),
        "threshold": share_set.threshold,
        "used_x": [str(share.x) for share in used],
        "processed_by": user,
    })


if __name__ == "__main__":
    ssl_context = None
    protocol = "http"

    if USE_SSL:
        if not SSL_CERT_PATH.exists() or not SSL_KEY_PATH.exists():
            raise FileNotFoundError(
                f"No se encontraron los certificados TLS en {SSL_CERT_PATH} y {SSL_KEY_PATH}."
            )
        ssl_context = (str(SSL_CERT_PATH), str(SSL_KEY_PATH))
        protocol = "https"

    print(f"Servidor en {protocol}://{SERVER_HOST}:{SERVER_PORT}")
    app.run(host=SERVER_HOST, port=SERVER_PORT, ssl_context=ssl_context)
