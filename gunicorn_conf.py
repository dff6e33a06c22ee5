import multiprocessing
import os

# Gunicorn configuration file
# For FastAPI/Uvicorn, we use the UvicornWorker
# Run: gunicorn app.main:app -c gunicorn_conf.py

bind = os.getenv("BIND", "0.0.0.0:8000")

# Standard formula: (2 x num_cores) + 1, overridable per deployment
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# Timeout and Keepalive
timeout = 60
keepalive = 5

# Logging
accesslog = "-" # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Process management
name = "task_api"
reload = False  # Set to True for development only
