# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv(os.path.join(BASE_DIR, '.env'))


class Config:
    TESTING = False

    MONGODB_URI = os.getenv('MONGODB_URI', 'mongodb://localhost:27017/bible_study')
    MONGODB_DB = os.getenv('MONGODB_DB', 'bible_study')
    # Alternate pymongo-compatible client class, e.g. mongomock.MongoClient in tests
    MONGO_CLIENT_CLASS = None

    JWT_SECRET = os.getenv('JWT_SECRET', 'change-me')
    JWT_EXPIRATION_HOURS = int(os.getenv('JWT_EXPIRATION_HOURS', 24))

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1MB, request bodies are small JSON documents

    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 50

    # Compare-and-set attempts for a progress write before giving up
    PROGRESS_WRITE_ATTEMPTS = int(os.getenv('PROGRESS_WRITE_ATTEMPTS', 3))
