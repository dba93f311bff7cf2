"""
Client connection settings. Change these to match your backend server.
"""

SCHEME = "http"
HOST = "localhost"
PORT = 8000

BASE_URL = f"{SCHEME}://{HOST}:{PORT}"
