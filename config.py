import os
from dotenv import load_dotenv

load_dotenv()

PRODUCTION = os.getenv("PRODUCTION") == "true"
PORT = int(os.getenv("TIC_TAC_PORT", "10101"))
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# "fallback" means no remote adviser, the heuristic AI plays alone
DEEPSEEK_API_KEY = os.getenv("DEEPSEEK_API_KEY", "fallback")
DEEPSEEK_MODEL = os.getenv("DEEPSEEK_MODEL", "deepseek-coder")
DEEPSEEK_BASE_URL = os.getenv("DEEPSEEK_BASE_URL", "https://api.deepseek.com")
AI_TIMEOUT_S = float(os.getenv("AI_TIMEOUT_S", "10"))
