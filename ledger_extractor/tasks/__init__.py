"""Background processing with Celery."""
