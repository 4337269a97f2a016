"""
Aritmética racional exacta sobre enteros de Python.

Cada ``Fraction`` se normaliza al construirse: denominador positivo y
numerador/denominador coprimos. No hay redondeo en ningún paso.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from server.errors import ZeroDenominatorError


@dataclass(frozen=True)
class Fraction:
    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        numerator, denominator = self.numerator, self.denominator
        if denominator == 0:
            raise ZeroDenominatorError(numerator)
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        # math.gcd(0, d) == d, así 0/d queda como 0/1
        divisor = math.gcd(numerator, denominator)
        object.__setattr__(self, "numerator", numerator // divisor)
        object.__setattr__(self, "denominator", denominator // divisor)

    def __add__(self, other: Fraction) -> Fraction:
        return add(self, other)

    def __mul__(self, other: Fraction) -> Fraction:
        return multiply(self, other)

    def is_integer(self) -> bool:
        return self.numerator % self.denominator == 0

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


def normalize(numerator: int, denominator: int) -> Fraction:
    """Forma canónica de numerator/denominator (falla si denominator == 0)."""
    return Fraction(numerator, denominator)


def add(a: Fraction, b: Fraction) -> Fraction:
    return normalize(
        a.numerator * b.denominator + b.numerator * a.denominator,
        a.denominator * b.denominator,
    )


def multiply(a: Fraction, b: Fraction) -> Fraction:
    return normalize(a.numerator * b.numerator, a.denominator * b.denominator)


ZERO = Fraction(0)
ONE = Fraction(1)
