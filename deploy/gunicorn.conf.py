"""
Gunicorn configuration for the MyArc API.
Everything is driven from environment variables for container deployment.
"""

from __future__ import annotations

import logging
import multiprocessing
import os

wsgi_app = os.environ.get("GUNICORN_WSGI_APP", "myarc.wsgi:app")
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")

# ===== Workers =====
# Requests spend most of their time waiting on the embedding and analysis
# vendors, so threads matter more than processes.
worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "gthread")
workers = int(os.environ.get("GUNICORN_WORKERS", str(multiprocessing.cpu_count() + 1)))
threads = int(os.environ.get("GUNICORN_THREADS", "8"))
max_requests = int(os.environ.get("GUNICORN_MAX_REQUESTS", "5000"))
max_requests_jitter = int(os.environ.get("GUNICORN_MAX_REQUESTS_JITTER", "500"))

# ===== Timeouts =====
# Must exceed AI_REQUEST_TIMEOUT_SECONDS times the vendor calls made while
# creating an entry (embed, memory search, analyze, memory add).
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "150"))
graceful_timeout = int(os.environ.get("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.environ.get("GUNICORN_KEEPALIVE", "5"))

# ===== Logging =====
accesslog = os.environ.get("GUNICORN_ACCESSLOG", "-")
errorlog = os.environ.get("GUNICORN_ERRORLOG", "-")
loglevel = os.environ.get("GUNICORN_LOGLEVEL", "info")
capture_output = True
# JSON access log. Query strings can hold search text, so log the path only.
access_log_format = os.environ.get(
    "GUNICORN_ACCESS_LOG_FORMAT",
    '{"timestamp": "%(t)s", "remote": "%(h)s", "method": "%(m)s", "path": "%(U)s", '
    '"status": %(s)s, "bytes": %(b)s, "response_time_us": %(D)s, "pid": %(p)s}',
)

limit_request_line = int(os.environ.get("GUNICORN_LIMIT_REQUEST_LINE", "8190"))
forwarded_allow_ips = os.environ.get("GUNICORN_FORWARDED_ALLOW_IPS", "127.0.0.1")
proc_name = os.environ.get("GUNICORN_PROC_NAME", "myarc")
preload_app = os.environ.get("GUNICORN_PRELOAD", "false").lower() in ("1", "true", "yes")


def when_ready(server):
    logging.getLogger(__name__).info(
        "MyArc ready on %s (workers=%s, threads=%s, timeout=%ss)", bind, workers, threads, timeout
    )


def worker_abort(worker):
    """Called when a worker is timed out and is being replaced."""
    logging.getLogger(__name__).warning("Worker %s timed out (>%ss), aborting", worker.pid, timeout)
