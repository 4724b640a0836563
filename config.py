import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Flat-file tables live under DATA_DIR
    DATA_DIR = os.getenv("DATA_DIR", os.path.join(BASE_DIR, "data"))
    USERS_FILE = os.getenv("USERS_FILE", "users.csv")
    AUDIT_FILE = os.getenv("AUDIT_FILE", "audit.csv")

    # Static pages (login/signup forms)
    STATIC_DIR = os.getenv("STATIC_DIR", os.path.join(BASE_DIR, "static"))
    LOGIN_PAGE = "login.html"

    # Single allowed origin, or "*"
    CORS_ORIGIN = os.getenv("CORS_ORIGIN", "*")

    # Signup rules
    MIN_PASSWORD_LENGTH = int(os.getenv("MIN_PASSWORD_LENGTH", "6"))
    MIN_AGE = int(os.getenv("MIN_AGE", "13"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Dev server
    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "3000"))

    DEBUG = False
