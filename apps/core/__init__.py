"""
Core app - pieces shared by the other apps.

- TaskService: runs background jobs locally or through Celery
- DataProvider: read access to clients, plans and invoices, backed by the
  database or by a browser local-storage export file
- legacy: decoding of that export
- seed: sample data for development
"""
