# Reconstrucción exacta de secretos Shamir (interpolación de Lagrange en Q)

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from server.base_parser import parse_in_base
from server.errors import (
    InsufficientPointsError,
    InvalidSelectionError,
    NonIntegerResultError,
    ShareDocumentError,
)
from server.fraction import ONE, ZERO, Fraction

# solo dígitos ASCII: int() aceptaría también "1_0" o dígitos Unicode
SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")
UNSIGNED_DECIMAL = re.compile(r"[0-9]+")


# ---------------------------
# TIPOS: Share y ShareSet
# ---------------------------
@dataclass(frozen=True)
class Share:
    """Un punto (x, y) del polinomio; inmutable una vez construido."""

    x: int
    y: int

    @classmethod
    def from_raw(cls, key: str, base, value: str) -> Share:
        """
        Construye un share a partir de los datos en crudo del documento.
        - key: coordenada x en decimal (puede llevar signo)
        - base: base de 'value' (int o cadena decimal)
        - value: dígitos de y en esa base
        """
        if not SIGNED_DECIMAL.fullmatch(str(key)):
            raise ShareDocumentError(f"La clave '{key}' no es una coordenada x decimal.")
        x = int(str(key), 10)
        if isinstance(base, str):
            if not UNSIGNED_DECIMAL.fullmatch(base):
                raise ShareDocumentError(f"La base '{base}' del share x={x} no es un entero.")
            base = int(base, 10)
        return cls(x, parse_in_base(str(value), base))


@dataclass(frozen=True)
class ShareSet:
    """Umbral k y shares ordenados por x ascendente."""

    threshold: int
    shares: Tuple[Share, ...]

    def __post_init__(self) -> None:
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, int) or self.threshold < 1:
            raise InvalidSelectionError(f"El umbral k debe ser un entero >= 1 (es {self.threshold!r}).")
        # orden estable: los índices 1..n se refieren a este orden
        object.__setattr__(self, "shares", tuple(sorted(self.shares, key=lambda s: s.x)))

    def __len__(self) -> int:
        return len(self.shares)


# ---------------------------
# FUNCIÓN interpolate_at_zero: valor exacto del polinomio en x=0
# ---------------------------
def interpolate_at_zero(points: Sequence[Share]) -> Fraction:
    """
    Interpolación de Lagrange evaluada en x=0, sin reducción modular.
    - points: los k shares a usar
    Devuelve: Fraction con el valor interpolado (puede no ser entera)
    """
    if not points:
        raise InsufficientPointsError(0, 1)

    total = ZERO
    for i, point in enumerate(points):
        # base de Lagrange de este punto evaluada en 0: prod (-xj)/(xi-xj)
        basis = ONE
        for j, other in enumerate(points):
            if i == j:
                continue
            # xi == xj lanza ZeroDenominatorError
            basis = basis * Fraction(-other.x, point.x - other.x)
        total = total + Fraction(point.y * basis.numerator, basis.denominator)
    return total


def reconstruct(points: Sequence[Share]) -> int:
    """
    Reconstruye el secreto (término independiente) a partir de k shares.
    Lanza NonIntegerResultError si el valor en x=0 no es entero.
    """
    value = interpolate_at_zero(points)
    if not value.is_integer():
        raise NonIntegerResultError(value)
    return value.numerator // value.denominator


# ---------------------------
# SELECCIÓN de los k shares a usar
# ---------------------------
def parse_positions(text: str) -> List[int]:
    """Convierte "1, 3,5" en [1, 3, 5]."""
    positions = []
    for token in text.split(","):
        token = token.strip()
        if not UNSIGNED_DECIMAL.fullmatch(token):
            raise InvalidSelectionError(f"Índice no numérico: '{token}'.")
        positions.append(int(token, 10))
    return positions


def select_shares(share_set: ShareSet, positions: Optional[Iterable[int]] = None) -> Tuple[Share, ...]:
    """
    Elige los shares que entran en la interpolación.
    - share_set: shares disponibles (orden ascendente por x)
    - positions: índices 1-based sobre ese orden, exactamente k y distintos;
      si es None se toman los k primeros
    """
    k = share_set.threshold
    available = share_set.shares

    if positions is None:
        if len(available) < k:
            raise InsufficientPointsError(len(available), k)
        return available[:k]

    positions = list(positions)
    if len(positions) != k:
        raise InvalidSelectionError(
            f"La lista de índices debe contener exactamente k={k} índices (tiene {len(positions)})."
        )
    for position in positions:
        if isinstance(position, bool) or not isinstance(position, int):
            raise InvalidSelectionError(f"Índice no entero: {position!r}.")
        if not 1 <= position <= len(available):
            raise InvalidSelectionError(f"Índice fuera de rango: {position}.")
    if len(set(positions)) != len(positions):
        raise InvalidSelectionError(f"Índices repetidos en la selección: {positions}.")
    return tuple(available[position - 1] for position in positions)


# ---------------------------
# FUNCIÓN recover_secret: selección + reconstrucción
# ---------------------------
def recover_secret(share_set: ShareSet, positions: Optional[Iterable[int]] = None) -> int:
    """
    Reconstruye el secreto usando los primeros k shares o los indicados.
    No comprueba la consistencia del resto de shares disponibles.
    """
    return reconstruct(select_shares(share_set, positions))
