"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 --threads 4 -b 0.0.0.0:8000 wsgi:app

Use a single worker: the live board and its polling timer live in-process.
"""

from xsmb import create_app

app = create_app()
