# vehweight/settings.py
from pathlib import Path
import os

ROOT = Path(__file__).resolve().parents[1]
OUT = Path(os.getenv("VW_OUT_DIR", ROOT / "data_out"))

# NY DMV "Vehicle, Snowmobile, and Boat Registrations" (Socrata)
SOURCE_URL = os.getenv("VW_SOURCE_URL", "https://data.ny.gov/resource/w4pv-hbkt.json")
RECORD_TYPE = os.getenv("VW_RECORD_TYPE", "VEH")
COLUMNS = ("model_year", "unladen_weight", "vin")
# :id is Socrata's row id; it breaks model_year ties so page boundaries are stable
ORDER_BY = os.getenv("VW_ORDER_BY", "model_year,:id")
APP_TOKEN = os.getenv("VW_APP_TOKEN") or None

BATCH_SIZE = int(os.getenv("VW_BATCH_SIZE", "50000"))
MAX_RECORDS = int(os.getenv("VW_MAX_RECORDS", "0")) or None
REQUEST_DELAY = float(os.getenv("VW_REQUEST_DELAY", "0.5"))
REQUEST_TIMEOUT = float(os.getenv("VW_REQUEST_TIMEOUT", "180"))

LOG_LEVEL = os.getenv("VW_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("VW_LOG_FORMAT", "text")

AGG_PARQUET = OUT / "weight_shares.parquet"
SUMMARY_CSV = OUT / "weight_summary.csv"
STATUS_JSON = OUT / "fetch_status.json"

if __name__ == "__main__":
    print("ROOT:", ROOT)
    print("OUT:", OUT)
    print("SOURCE_URL:", SOURCE_URL)
    print("BATCH_SIZE:", BATCH_SIZE)
    print("MAX_RECORDS:", MAX_RECORDS)
