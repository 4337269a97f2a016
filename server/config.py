"""
Configuración centralizada del reconstructor de secretos
"""

# Configuración del servidor
SERVER_HOST = "127.0.0.1"
SERVER_PORT = 5000

# Alfabeto de dígitos para bases 2..36 (sin distinguir mayúsculas)
DIGIT_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
MIN_BASE = 2
MAX_BASE = 36

# Documento de shares: {"keys": {"k": ...}, "<x>": {"base": ..., "value": ...}}
THRESHOLD_SECTION = "keys"
THRESHOLD_FIELD = "k"
