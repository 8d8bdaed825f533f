# factory_ops/config.py

import os
import logging

# --- Storage Configuration ---
BASE_DIR = os.environ.get(
    "FACTORY_OPS_HOME",
    os.path.join(os.path.expanduser("~"), ".factory_ops"),
)
DATA_DIR = os.path.join(BASE_DIR, "data")
DB_NAME = "factory_data.db"
DATABASE_PATH = os.environ.get("FACTORY_OPS_DB", os.path.join(DATA_DIR, DB_NAME))

# The whole factory state lives in one document: collection 'factory' -> document 'main_data'
DOCUMENT_COLLECTION = "factory"
DOCUMENT_ID = "main_data"

# --- Logging Configuration ---
LOGS_DIR = os.path.join(BASE_DIR, "logs")
LOG_FILE_NAME = "app.log"
LOG_FILE_PATH = os.path.join(LOGS_DIR, LOG_FILE_NAME)

LOG_LEVEL = logging.DEBUG
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s'

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': LOG_FORMAT,
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
            'level': logging.DEBUG,
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'standard',
            'filename': LOG_FILE_PATH,
            'maxBytes': 1024*1024*5,  # 5 MB
            'backupCount': 5,
            'level': logging.INFO,
            'encoding': 'utf-8',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': LOG_LEVEL,
    },
}

# --- Application Settings (defaults, the factory document's settings win) ---
DEFAULT_LANGUAGE = os.environ.get("FACTORY_OPS_LANG", "th")
COMPANY_NAME = "CT Electric"
ITEMS_PER_PAGE = 10


def ensure_directories():
    """Create the data and logs directories if they don't exist."""
    for directory in (os.path.dirname(DATABASE_PATH), LOGS_DIR):
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
