"""
Taxonomía de errores de la reconstrucción.

Ningún error se recupera dentro del núcleo: todos se propagan al llamador,
que decide cómo informar (mensaje + código de salida en la CLI, 4xx en la
API). Cada clase hereda además de la excepción estándar más cercana para
que quien capture ``ValueError`` siga funcionando.
"""


class ReconstructionError(Exception):
    """Base común de todos los fallos de reconstrucción."""


class InvalidDigitError(ReconstructionError, ValueError):
    def __init__(self, character: str, base: int) -> None:
        self.character = character
        self.base = base
        super().__init__(f"Dígito '{character}' inválido para base {base}.")


class InvalidBaseError(ReconstructionError, ValueError):
    def __init__(self, base) -> None:
        self.base = base
        super().__init__(f"Base {base!r} fuera del rango admitido (2..36).")


class ZeroDenominatorError(ReconstructionError, ZeroDivisionError):
    def __init__(self, numerator: int) -> None:
        self.numerator = numerator
        super().__init__(
            f"Denominador cero al construir la fracción {numerator}/0 "
            "(¿shares con la misma x?)."
        )


class NonIntegerResultError(ReconstructionError, ArithmeticError):
    """La interpolación en x=0 no es un entero; conserva la fracción."""

    def __init__(self, fraction) -> None:
        self.fraction = fraction
        super().__init__(f"El resultado no es entero: {fraction}")


class InvalidSelectionError(ReconstructionError, ValueError):
    pass


class InsufficientPointsError(InvalidSelectionError):
    def __init__(self, available: int, required: int) -> None:
        self.available = available
        self.required = required
        super().__init__(
            f"No hay suficientes shares: hay {available}, se necesitan k={required}."
        )


class ShareDocumentError(ReconstructionError, ValueError):
    """Documento de shares mal formado."""
