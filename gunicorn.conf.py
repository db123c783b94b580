# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

wsgi_app = "app:create_app()"

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info').lower()

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Requests are short CRUD calls against MongoDB
cores = multiprocessing.cpu_count()
workers = min(cores * 2 + 1, 6)
threads = 4


def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers on port {port}")
    logger.info(f"Worker timeout set to {timeout} seconds")


timeout = 30
keepalive = 5
worker_class = "sync"

# Process naming
proc_name = "bible_study"
default_proc_name = "bible_study"

graceful_timeout = 30
