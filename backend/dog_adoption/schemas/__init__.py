"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Response keys are camelCase on the wire; Python attributes stay snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Request fields optional at the schema level: missing-field messages come
      from core/enforce_input.py so clients get the exact domain message
"""
