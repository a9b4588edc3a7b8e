import os

bind = f"0.0.0.0:{os.getenv('PORT', 8000)}"
wsgi_app = "app.main:app"
workers = int(os.getenv('WEB_CONCURRENCY', 2))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = int(os.getenv('GUNICORN_TIMEOUT', 60))
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
accesslog = "-"
max_requests = 1000
max_requests_jitter = 100
