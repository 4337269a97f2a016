import importlib
import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _build_flask_app(monkeypatch, extra_env=None):
    monkeypatch.setenv("USE_SSL", "false")
    monkeypatch.delenv("SSL_CERT_PATH", raising=False)
    monkeypatch.delenv("SSL_KEY_PATH", raising=False)
    monkeypatch.setenv("AUTH_USERNAME", "tester")
    monkeypatch.setenv("AUTH_PASSWORD", "secret")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret-key-with-enough-length-32")
    monkeypatch.setenv("JWT_EXPIRES_MINUTES", "5")
    monkeypatch.setenv("FRONTEND_ORIGIN", "http://127.0.0.1:5000")

    if extra_env:
        for key, value in extra_env.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return importlib.reload(importlib.import_module("server.main"))


def evaluate(coeffs, x):
    """Evalúa a0 + a1*x + ... en enteros (sin módulo)."""
    total = 0
    for coefficient in reversed(coeffs):
        total = total * x + coefficient
    return total


@pytest.fixture
def polynomial():
    return evaluate


@pytest.fixture
def flask_env(monkeypatch):
    """Prepara entorno aislado para pruebas del servidor Flask sin rate limiting."""
    return _build_flask_app(monkeypatch, {"LIMITER_ENABLED": "false"})


@pytest.fixture
def limited_flask_env(monkeypatch):
    """Flask app con rate limiting habilitado y umbrales bajos para pruebas."""
    extra_env = {
        "LIMITER_ENABLED": "true",
        "LIMITER_DEFAULT_RATE": "100 per minute",
    }
    return _build_flask_app(monkeypatch, extra_env)


@pytest.fixture
def auth_headers(flask_env):
    client = flask_env.app.test_client()
    response = client.post(
        "/api/auth/login",
        json={"username": "tester", "password": "secret"},
    )
    assert response.status_code == 200
    token = response.get_json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_document():
    """Shares de f(x) = x^2 + 3 en bases mezcladas; el secreto es 3."""
    return {
        "keys": {"n": 4, "k": 3},
        "1": {"base": "10", "value": "4"},
        "2": {"base": "2", "value": "111"},
        "3": {"base": "10", "value": "12"},
        "6": {"base": "4", "value": "213"},
    }


@pytest.fixture
def share_file(tmp_path, sample_document):
    path = tmp_path / "shares.json"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path
