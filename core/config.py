import os
from dotenv import load_dotenv

# Load .env so overrides are available even when running via Streamlit
load_dotenv()

# Path: project_root/data/clinic.db
BASE_DIR = os.path.dirname(os.path.dirname(__file__))
DATA_DIR = os.getenv("CLINIC_DATA_DIR", os.path.join(BASE_DIR, "data"))

DATABASE_URL = os.getenv(
    "CLINIC_DATABASE_URL",
    f"sqlite:///{os.path.join(DATA_DIR, 'clinic.db')}",
)

LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("CLINIC_LOG_FILE") or None

# Shown by the login page's password recovery notice
SUPPORT_EMAIL = os.getenv("CLINIC_SUPPORT_EMAIL", "soporte.policlinico@email.com")
SUPPORT_PHONE = os.getenv("CLINIC_SUPPORT_PHONE", "(099) 123-4567")
