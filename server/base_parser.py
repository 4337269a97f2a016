from server.config import DIGIT_ALPHABET, MAX_BASE, MIN_BASE
from server.errors import InvalidBaseError, InvalidDigitError

# valor de cada carácter del alfabeto: '0' -> 0 ... 'z' -> 35
DIGIT_VALUES = {char: value for value, char in enumerate(DIGIT_ALPHABET)}


def parse_in_base(digits: str, base: int) -> int:
    """
    Convierte una cadena de dígitos en la base indicada a un entero.
    - digits: dígitos '0'-'9' y 'a'-'z' (mayúsculas aceptadas), sin signo
      ni espacios
    - base: entero entre 2 y 36
    Devuelve: entero no negativo (precisión arbitraria)
    """
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(base)
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBaseError(base)

    value = 0
    # el dígito más significativo va primero
    for char in digits:
        digit = DIGIT_VALUES.get(char.lower())
        if digit is None or digit >= base:
            raise InvalidDigitError(char, base)
        value = value * base + digit
    return value
