#!/usr/bin/env python3
"""Check the .env file for Supabase credentials, creating a template when it is missing."""

from pathlib import Path
import sys

TEMPLATE = """# Supabase Configuration (required)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
SALON_SUPABASE_URL=https://your-project-id.supabase.co
SALON_SUPABASE_KEY=your-service-role-key-here

# API Configuration
SALON_API_PREFIX=/api
SALON_LOG_LEVEL=INFO
# SALON_FRONTEND_ALLOWED_ORIGINS accepts a JSON array or a comma-separated list

# Discovery
SALON_TIMEZONE=Europe/Berlin
SALON_GEOCODING_BASE_URL=https://nominatim.openstreetmap.org
SALON_QUERY_CACHE_TTL_SECONDS=60
SALON_QUERY_CACHE_MAX_ENTRIES=1024

# Billing
SALON_TAX_RATE_PERCENT=19
SALON_INVOICE_FUNCTION_NAME=create-invoice
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 30 else value


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env at {env_file}; add your Supabase credentials and rerun.")
        return 1

    print(f"Found .env at {env_file}")
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("SALON_SUPABASE_KEY="):
            name, value = line.split("=", 1)
            print(f"  {name}={_mask(value.strip())}")
        elif line and not line.startswith("#"):
            print(f"  {line}")

    sys.path.insert(0, str(project_root / "src"))
    try:
        from salon.config import settings
    except Exception as exc:
        print(f"Error loading config: {exc}")
        return 1

    missing = [name for name, value in (("SALON_SUPABASE_URL", settings.supabase_url), ("SALON_SUPABASE_KEY", settings.supabase_key)) if not value]
    if missing:
        print(f"Supabase is NOT configured; missing {', '.join(missing)}.")
        print("Variables must use the SALON_ prefix; restart the backend after editing .env.")
        return 1

    print(f"Supabase configured for {settings.supabase_url[:30]}... (timezone {settings.timezone})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
