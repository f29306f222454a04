"""Database Metadata: the declarative Base shared by models and migrations."""
