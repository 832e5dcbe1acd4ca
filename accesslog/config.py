import os

# -----------------------
# Settings (from env, with sane defaults)
# -----------------------
DEFAULT_GRAMMAR = os.getenv("ACCESSLOG_DEFAULT_GRAMMAR", "securepoint")
SAMPLE_SIZE = int(os.getenv("ACCESSLOG_SAMPLE_SIZE", "10"))
BATCH_SIZE = int(os.getenv("ACCESSLOG_BATCH_SIZE", "1000"))
LOG_LEVEL = os.getenv("ACCESSLOG_LOG_LEVEL", "INFO").upper()

# Progress is logged every PROGRESS_EVERY lines; only the first few failures are echoed.
PROGRESS_EVERY = 10_000
MAX_LOGGED_FAILURES = 5
