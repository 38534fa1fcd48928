import os

# Bind & workers
bind = f"0.0.0.0:{os.getenv('PORT', '3000')}"
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
# Batch uploads block on storage I/O; threads keep the worker responsive
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Honour proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
