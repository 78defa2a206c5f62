import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL")

# Supabase Configuration
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
SUPABASE_JWT_AUDIENCE = os.getenv("SUPABASE_JWT_AUDIENCE", "authenticated")

# Security - CRITICAL: No default JWT secret in production
SUPABASE_JWT_SECRET = os.getenv("SUPABASE_JWT_SECRET")
if not SUPABASE_JWT_SECRET:
    import warnings

    warnings.warn(
        "SUPABASE_JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    SUPABASE_JWT_SECRET = "INSECURE-DEV-JWT-SECRET-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Frontend base URL
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Database provisioning
# "rpc" runs scripts through the public.exec_sql function, "direct" runs them on the connection
PROVISIONING_MODE = os.getenv("PROVISIONING_MODE", "rpc").lower()
MIGRATION_STEP_DELAY = float(os.getenv("MIGRATION_STEP_DELAY", "0.1"))

# Monitoring
MONITORING_MAX_STORED_ITEMS = int(os.getenv("MONITORING_MAX_STORED_ITEMS", "1000"))
MONITORING_REPORTING_ENDPOINT = os.getenv("MONITORING_REPORTING_ENDPOINT")
MONITORING_REPORT_INTERVAL = int(os.getenv("MONITORING_REPORT_INTERVAL", "300"))  # 5 minutes

# External AI services probed by the health check
AI_TEXT_SERVICE_URL = os.getenv("AI_TEXT_SERVICE_URL", "https://text.pollinations.ai/")
AI_IMAGE_SERVICE_URL = os.getenv(
    "AI_IMAGE_SERVICE_URL", "https://image.pollinations.ai/prompt/test?width=100&height=100"
)
HEALTH_MEMORY_WARNING_MB = int(os.getenv("HEALTH_MEMORY_WARNING_MB", "200"))

# CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:9002"
).split(",")
SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development").lower() == "production"
MONITORING_RETENTION_DAYS = int(os.getenv("MONITORING_RETENTION_DAYS", "30"))
