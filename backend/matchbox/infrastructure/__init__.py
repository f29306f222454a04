"""Infrastructure Layer: database access, store adapters and logging setup.

Invariants:
    - Store adapters implement the Protocols in core/repository_protocols.py
    - All SQLAlchemy failures leave this layer as StoreError
"""
