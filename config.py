"""
Runtime configuration for the availability runner.
Every value can be overridden with an AVAILABILITY_* environment variable.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

DATA_FILE = Path(os.environ.get("AVAILABILITY_DATA_FILE", BASE_DIR / "availability_data.json"))
EXPORT_FILE = Path(os.environ.get("AVAILABILITY_EXPORT_FILE", BASE_DIR / "timeline_export.json"))

RESOURCE_ID = os.environ.get("AVAILABILITY_RESOURCE_ID", "1")
REPORT_DAYS = int(os.environ.get("AVAILABILITY_REPORT_DAYS", "14"))

DEFAULT_HOURLY_RATE = os.environ.get("AVAILABILITY_DEFAULT_HOURLY_RATE", "50.00")
CURRENCY = os.environ.get("AVAILABILITY_CURRENCY", "USD")

LOG_LEVEL = os.environ.get("AVAILABILITY_LOG_LEVEL", "INFO")
