import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
UPLOAD_DIR = os.environ.get("UPLOAD_DIR", os.path.join(BASE_DIR, "uploads"))
os.makedirs(UPLOAD_DIR, exist_ok=True)

PORT = int(os.environ.get("PORT", 5000))
DEBUG = os.environ.get("RENDER") is None  # debug only when running locally
SECRET_KEY = os.environ.get("SECRET_KEY", "dev-propintel-key")
CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "*")

HISTORY_LIMIT = int(os.environ.get("HISTORY_LIMIT", 10))

# Report layout (PDF points)
REPORT_MARGIN = float(os.environ.get("REPORT_MARGIN", 40))
REPORT_STREAM_CHUNK_SIZE = int(os.environ.get("REPORT_STREAM_CHUNK_SIZE", 8192))
REPORT_FILENAME = "underwriting-report.pdf"
