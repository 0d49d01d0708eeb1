"""
Collaborator services injected into capabilities.
"""
