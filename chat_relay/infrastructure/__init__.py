"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- auth/: JWT session tokens and password hashing
- persistence/: In-memory user store and message log
- cache/: Redis client and Redis-backed message log
"""
