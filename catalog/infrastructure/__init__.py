"""
Infrastructure layer.

SQLAlchemy persistence and mail notifications.
"""
