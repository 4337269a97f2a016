# Configuración del cliente
import os

SERVER_URL = os.getenv("SERVER_URL", "http://127.0.0.1:5000/api/reconstruct")

# Credenciales para /api/auth/login
AUTH_USERNAME = os.getenv("AUTH_USERNAME", "admin")
AUTH_PASSWORD = os.getenv("AUTH_PASSWORD", "changeme")

REQUEST_TIMEOUT = 15
