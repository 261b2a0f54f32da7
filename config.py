import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    API_URL = os.getenv("API_URL") or "http://localhost:8000"
    USER_API_URL = os.getenv("USER_API_URL") or API_URL
    MEDIA_URL = os.getenv("MEDIA_URL", "")

    TOKEN_FILE = os.path.expanduser(os.getenv("TOKEN_FILE") or "~/.arudeal/session.json")
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT")) if os.getenv("REQUEST_TIMEOUT") else None

    PAGE_SIZE = int(os.getenv("PAGE_SIZE") or "12")
    SEARCH_SOURCE_LIMIT = int(os.getenv("SEARCH_SOURCE_LIMIT") or "1000")
