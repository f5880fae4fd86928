SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "class_schedule_test",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

PERSISTENCE_BACKEND = "memory"
AUTO_INIT_DB = False

REMINDER_INTERVAL_SECONDS = 60
DEFAULT_HORIZON_MONTHS = 1
