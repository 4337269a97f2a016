"""
Reconstrucción local del secreto desde un documento de shares.

Uso: python -m client.reconstruct <archivo.json> [indices]

``indices`` es opcional: lista separada por comas de posiciones 1-based
(sobre los shares ordenados por x) con exactamente k elementos.
"""

import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from server.errors import ReconstructionError
from server.shamir_core import parse_positions, recover_secret
from server.share_document import read_share_file

USAGE = "Uso: python -m client.reconstruct <archivo.json> [indices]"


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if not args or len(args) > 2:
        raise SystemExit(USAGE)

    # los secretos pueden superar el límite de dígitos de int -> str
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    try:
        share_set = read_share_file(args[0])
        # un segundo argumento vacío equivale a no indicar índices
        positions = parse_positions(args[1]) if len(args) == 2 and args[1] else None
        secret = recover_secret(share_set, positions)
    except OSError as exc:
        raise SystemExit(f"❌ No se pudo leer {args[0]}: {exc.strerror or exc}")
    except ReconstructionError as exc:
        raise SystemExit(f"❌ {type(exc).__name__}: {exc}")

    print(secret)
    return 0


if __name__ == "__main__":
    main()
