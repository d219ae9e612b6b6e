# config.py
"""
Environment configuration for the leasing backend.

All settings are read from the process environment (optionally populated
from a local .env file).
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Database
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")
DATABASE_URL = os.getenv("DATABASE_URL")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Public links
CLIENT_URL = os.getenv("CLIENT_URL", "http://localhost:3000").rstrip("/")
LEASE_INVITE_TTL_DAYS = int(os.getenv("LEASE_INVITE_TTL_DAYS", "7"))

# Contract renderer
CONTRACT_RENDERER_URL = os.getenv("CONTRACT_RENDERER_URL")
CONTRACT_RENDERER_API_KEY = os.getenv("CONTRACT_RENDERER_API_KEY")
CONTRACT_RENDERER_TIMEOUT = float(os.getenv("CONTRACT_RENDERER_TIMEOUT", "30"))

# Email (Brevo)
BREVO_API_KEY = os.getenv("BREVO_API_KEY")
EMAIL_SENDER_NAME = os.getenv("EMAIL_SENDER_NAME", "Leasing")
EMAIL_SENDER_ADDRESS = os.getenv("EMAIL_SENDER_ADDRESS", "noreply@example.com")

# Blob storage
AZURE_STORAGE_ACCOUNT = os.getenv("AZURE_STORAGE_ACCOUNT")
AZURE_STORAGE_KEY = os.getenv("AZURE_STORAGE_KEY")
AZURE_UPLOAD_CONTAINER = os.getenv("AZURE_UPLOAD_CONTAINER", "lease-documents")
AZURE_SAS_TTL_MINUTES = int(os.getenv("AZURE_SAS_TTL_MINUTES", "15"))

# HTTP
CORS_ORIGINS = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
PORT = int(os.getenv("PORT", "10000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
