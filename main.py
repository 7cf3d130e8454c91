"""WSGI entrypoint for the Dinner Recipes application.

Local development uses ``flask --app main run``; deployments can point
Gunicorn at ``main:app``. The recipe store and navigation state live in the
process, so run a single worker; its request threads are safe to share them.
"""

from app import create_app

app = create_app()


__all__ = ["app"]
