"""
Gunicorn settings for serving the catalog API.

    gunicorn main:app -c gunicorn.conf.py
"""
import multiprocessing
import os
from pathlib import Path

from framework.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)

bind = os.getenv("CATALOG_BIND", "0.0.0.0:8000")
backlog = 2048

# Async workers; the SQLite provider is single-writer so keep the count small there
workers = int(os.getenv("CATALOG_WORKERS", "1" if settings.DB_PROVIDER.value == "sqlite" else min(4, multiprocessing.cpu_count())))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 50
timeout = 60
graceful_timeout = 30
keepalive = 5

proc_name = (settings.GUNICORN_PROC_NAME or settings.APP_NAME.lower().replace(" ", "-"))[:32]

accesslog = str(LOG_DIR / "gunicorn_access.log")
errorlog = str(LOG_DIR / "gunicorn_error.log")
loglevel = settings.LOG_LEVEL.lower()
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)sus trace=%({x-trace-id}o)s'

daemon = False
pidfile = str(LOG_DIR / "gunicorn.pid")
umask = 0o007

# Lifespan opens and disposes the engine per worker, so no preloading
preload_app = False

limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def when_ready(server):
    server.log.info("%s is ready. Listening on %s", settings.APP_NAME, server.address)


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def on_exit(server):
    server.log.info("%s is shutting down.", settings.APP_NAME)
