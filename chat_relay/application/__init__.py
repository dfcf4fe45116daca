"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- realtime/  → Connection registry, routing engine and connection gate
- commands/  → Write operations (CQRS)
- queries/   → Read operations (CQRS)
- dto/       → Data Transfer Objects for the wire formats
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on Domain layer only (plus Pydantic for DTOs)
- No HTTP/framework code here
"""
