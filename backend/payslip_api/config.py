import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", "..", ".env"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./payslips.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "$")
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
