"""WSGI entrypoint for Gunicorn.

The draw scheduler lives in the serving process, so run exactly one worker
and give it threads for the WebSocket connections:
  gunicorn -w 1 --threads 64 -b 0.0.0.0:8000 wsgi:app
"""

from lottery_live import create_app

app = create_app()
