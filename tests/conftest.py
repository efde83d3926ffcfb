import os

# Settings are read at import time, so the environment must be in place first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-secret-with-enough-length-for-hs256"
os.environ["SUPABASE_JWT_AUDIENCE"] = "authenticated"
os.environ["LOW_STOCK_THRESHOLD"] = "5"
os.environ["LOW_STOCK_LIMIT"] = "5"
os.environ["ON_TIME_TOLERANCE"] = "1.1"
os.environ["RECENT_LOG_LIMIT"] = "10"
