"""
Operations Layer

Pure business logic that sits between the backend client and the services:
- ingestion: raw backend rows -> validated aggregates, levels and profiles
- rating_submission: pending ratings -> a validated submission batch

Nothing in this package performs I/O or logging.
"""
