from pathlib import Path
from decouple import config  # make sure python-decouple is installed

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Security ---
SECRET_KEY = config("DJANGO_SECRET_KEY", default="huffchat-insecure-dev-key")
DEBUG = config("DJANGO_DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config("DJANGO_ALLOWED_HOSTS", default="localhost,127.0.0.1").split(",")

# --- Installed Apps ---
INSTALLED_APPS = [
    "channels",    # Django Channels
    "hc",          # huffman codec, TCP server and websocket consumer
]

# --- ASGI ---
ASGI_APPLICATION = "huffchat.asgi.application"

# --- Database ---
# Messages are never stored.
DATABASES = {}

# --- Huffman server ---
HUFFMAN_HOST = config("HUFFMAN_HOST", default="0.0.0.0")
HUFFMAN_CLIENT_HOST = config("HUFFMAN_CLIENT_HOST", default="localhost")
HUFFMAN_PORT = config("HUFFMAN_PORT", default=5000, cast=int)
# Seconds to wait for a complete frame, 0 waits forever.
HUFFMAN_READ_TIMEOUT = config("HUFFMAN_READ_TIMEOUT", default=0, cast=float)

# --- Logging ---
HUFFMAN_LOG_LEVEL = config("HUFFMAN_LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "hc": {
            "handlers": ["console"],
            "level": HUFFMAN_LOG_LEVEL,
            "propagate": False,
        },
    },
}
