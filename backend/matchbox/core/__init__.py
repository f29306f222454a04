"""Core Layer: pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
    - repository_protocols.py declares async contracts but implements none

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate the
      store calls around the pure checks in enforce_pair.py and safety.py
"""
