import os

# Database Configuration
# Local SQLite file by default; any Tortoise URL works (e.g. postgres://...)
DB_URL = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")

# Application Metadata
PROJECT_NAME = "TDS Stock Management"
VERSION = "1.0.0"

# Snapshot Storage Configuration
STORAGE_KEY = os.getenv("STORAGE_KEY", "tds_stock_mgmt_v10_final") # Namespace of the state blob

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
