"""
Gunicorn entrypoint: gunicorn --chdir backend wsgi:app
"""
from profile_review import create_app

app = create_app()
