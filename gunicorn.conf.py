# Gunicorn configuration for the quill blog API

import multiprocessing
import os

wsgi_app = "quill:create_app()"

# Server socket
bind = os.getenv("QUILL_BIND", "127.0.0.1:8000")

# Worker processes
workers = int(os.getenv("QUILL_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "gthread"
threads = 2

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100
timeout = 30
keepalive = 2
preload_app = True

# Request limits
limit_request_line = 4096
limit_request_fields = 100
limit_request_field_size = 8190

# Only drop privileges when running as root
if hasattr(os, "geteuid") and os.geteuid() == 0:
    user = os.getenv("GUNICORN_USER", "quill")
    group = os.getenv("GUNICORN_GROUP", "quill")

# Logging; application events go to stdout through structlog
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'
