"""
DOMAIN LAYER

This layer contains:
- Entities: Message, User and the ephemeral routing events
- Value Objects: UserId, MessageId
- Ports: Interfaces that infrastructure and presentation implement
- Exceptions: Domain-specific errors

No framework imports and no I/O live here.
"""
