import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
# Local SQLite file by default; any SQLAlchemy URL works
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/habittracker.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- App ---
APP_NAME = os.getenv("APP_NAME", "Habit Tracker")
