import os
from dotenv import load_dotenv

load_dotenv()

# Catalog service (inventory offers, prices, stock)
CATALOG_API_URL = os.getenv("CATALOG_API_URL", "http://localhost:5000/api").rstrip("/")
CATALOG_TIMEOUT = float(os.getenv("CATALOG_TIMEOUT", 10))

# Display
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "₹")

# Parser memoization
PARSE_CACHE_SIZE = int(os.getenv("PARSE_CACHE_SIZE", 1024))

# Server
PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
