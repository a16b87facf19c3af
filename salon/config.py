import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
env_path = PROJECT_ROOT / ".env"
load_dotenv(dotenv_path=env_path)

# Directory holding one JSON document per entity collection
DATA_DIR = Path(os.getenv("DATA_DIR", str(PROJECT_ROOT / "data")))

SALON_NAME = os.getenv("SALON_NAME", "Beauty Salon")

# Email Configuration
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "Beauty Salon <noreply@beautysalon.local>")
EMAIL_REPLY_TO = os.getenv("EMAIL_REPLY_TO", "contact@beautysalon.local")
RESEND_API_KEY = os.getenv("RESEND_API_KEY")

# Custom SMTP takes priority over Resend when SMTP_HOST is set
SMTP_HOST = os.getenv("SMTP_HOST")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

# Set NOTIFICATIONS_ENABLED=false to skip appointment emails entirely
NOTIFICATIONS_ENABLED = os.getenv("NOTIFICATIONS_ENABLED", "true").lower() == "true"

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:8000,http://localhost:5173,http://localhost:3000",
).split(",")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
