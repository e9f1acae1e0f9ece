import os
from dotenv import load_dotenv

load_dotenv()

QUALIFIED_STAFF_RATIO = float(os.getenv("QUALIFIED_STAFF_RATIO", "0.5"))
QUALIFICATION_SHORTFALL_SEVERITY = os.getenv("QUALIFICATION_SHORTFALL_SEVERITY", "warning").lower()
DEFAULT_TIME_SLOT = os.getenv("DEFAULT_TIME_SLOT", "09:00-15:00")

FATIGUE_LOOKBACK_DAYS = int(os.getenv("FATIGUE_LOOKBACK_DAYS", "14"))

PAYROLL_HOURS_PER_DAY = float(os.getenv("PAYROLL_HOURS_PER_DAY", "7.6"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_RELOAD = os.getenv("API_RELOAD", "false").lower() == "true"


def validate_engine_config() -> None:
    problems = []
    if not 0 < QUALIFIED_STAFF_RATIO <= 1:
        problems.append(f"QUALIFIED_STAFF_RATIO must be in (0, 1], got {QUALIFIED_STAFF_RATIO}")
    if QUALIFICATION_SHORTFALL_SEVERITY not in ("warning", "blocking"):
        problems.append(
            f"QUALIFICATION_SHORTFALL_SEVERITY must be 'warning' or 'blocking', got {QUALIFICATION_SHORTFALL_SEVERITY!r}"
        )
    if FATIGUE_LOOKBACK_DAYS < 7:
        problems.append(f"FATIGUE_LOOKBACK_DAYS must be at least 7, got {FATIGUE_LOOKBACK_DAYS}")
    if PAYROLL_HOURS_PER_DAY <= 0:
        problems.append(f"PAYROLL_HOURS_PER_DAY must be positive, got {PAYROLL_HOURS_PER_DAY}")

    if problems:
        raise RuntimeError(
            f"Invalid engine configuration: {'; '.join(problems)}. "
            "Please check these values in your .env file."
        )
