import os

wsgi_app = "habitflow.wsgi:app"
bind = os.environ.get("HABITFLOW_BIND", f"0.0.0.0:{os.environ.get('PORT', '8000')}")
workers = int(os.environ.get("WEB_CONCURRENCY", "3"))
threads = int(os.environ.get("HABITFLOW_THREADS", "1"))
timeout = int(os.environ.get("HABITFLOW_TIMEOUT", "30"))
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
