"""
Envía un documento de shares al servidor para que reconstruya el secreto.

Uso: python -m client.send_shares <archivo.json> [indices]
"""

import json
import os
import sys
from urllib.parse import urljoin

import requests

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from client.config import AUTH_PASSWORD, AUTH_USERNAME, REQUEST_TIMEOUT, SERVER_URL
from server.shamir_core import parse_positions


class RemoteReconstructionError(Exception):
    """El servidor rechazó la petición; conserva código y mensaje."""

    def __init__(self, status_code, message, kind=None):
        self.status_code = status_code
        self.message = message
        self.kind = kind
        label = f"{kind}: " if kind else ""
        super().__init__(f"HTTP {status_code} - {label}{message}")


def _error_from(response):
    try:
        body = response.json()
    except ValueError:
        return RemoteReconstructionError(response.status_code, response.text)
    return RemoteReconstructionError(
        response.status_code,
        body.get("error") or body.get("msg") or response.text,
        body.get("kind"),
    )


def login(api_base, username=AUTH_USERNAME, password=AUTH_PASSWORD):
    """Obtiene un token JWT en <api_base>auth/login."""
    response = requests.post(
        urljoin(api_base, "auth/login"),
        json={"username": username, "password": password},
        timeout=REQUEST_TIMEOUT,
    )
    if response.status_code != 200:
        raise _error_from(response)
    return response.json()["access_token"]


def request_reconstruction(document, positions=None, server_url=SERVER_URL,
                           username=AUTH_USERNAME, password=AUTH_PASSWORD):
    """
    Autentica y pide la reconstrucción remota.
    - document: diccionario con el formato del documento de shares
    - positions: índices 1-based opcionales (exactamente k)
    Devuelve: el secreto como entero
    """
    api_base = server_url.rsplit("/", 1)[0] + "/"
    token = login(api_base, username, password)

    response = requests.post(
        server_url,
        json={"document": document, "positions": positions},
        headers={"Authorization": f"Bearer {token}"},
        timeout=REQUEST_TIMEOUT,
    )
    if response.status_code != 200:
        raise _error_from(response)
    return int(response.json()["secret"])


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if not args or len(args) > 2:
        raise SystemExit("Uso: python -m client.send_shares <archivo.json> [indices]")

    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    try:
        with open(args[0], "r", encoding="utf-8") as handler:
            document = json.load(handler)
        # un segundo argumento vacío equivale a no indicar índices
        positions = parse_positions(args[1]) if len(args) == 2 and args[1] else None
        secret = request_reconstruction(document, positions)
    except RemoteReconstructionError as exc:
        raise SystemExit(f"❌ Error en la reconstrucción remota: {exc}")
    except requests.RequestException as exc:
        # RequestException hereda de OSError: va antes
        raise SystemExit(f"❌ No se pudo contactar con el servidor: {exc}")
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError y los errores de selección son ValueError
        raise SystemExit(f"❌ Error preparando la petición: {exc}")

    print(secret)
    return 0


if __name__ == "__main__":
    main()
