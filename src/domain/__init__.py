"""Domain layer.

Structure:
- entities/: User entity
- enums/: Role enum
- value_objects/: Access token claims, login attempt decisions
- protocols/: Ports implemented by infrastructure adapters
- errors/: Authentication error constants
"""
