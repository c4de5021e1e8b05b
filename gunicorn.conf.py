"""
Gunicorn configuration for the SugarReset API.

Env vars that override defaults:
  PORT: TCP port to bind
  WORKERS: number of worker processes (default: 2)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = int(os.environ.get("WORKERS", "2"))

# Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

wsgi_app = "sugarreset.main:app"

keepalive = 5
timeout = 120

# Application logs go to stdout via logging.basicConfig in sugarreset.main;
# gunicorn's own logs follow the same level.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
