"""
QUERIES - Read operations (CQRS)

- users/ → current user, roster with online state
- chat/  → conversation history
"""
