"""
security/ - Credential Handling
================================
Password hashing used by the user repository.
"""
