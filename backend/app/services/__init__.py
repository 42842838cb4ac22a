"""
Services Module
Business logic for users, categories, projects and their media.

Each service is built per request in app.api.v1.deps with the session and
the services it relies on. Services commit their own work and signal
failures with app.core.exceptions.
"""
