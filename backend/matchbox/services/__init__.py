"""Services Layer: conversation resolution, match binding and thin entry points.

Invariants:
    - Services receive stores as parameters (Protocols from core/repository_protocols.py)
    - No service imports infrastructure/ or a database session

Design Decisions:
    - ConversationResolver is the only find-or-create routine; every caller goes through it
"""
