"""
Core infrastructure: service container, service interfaces and discovery manifest.
"""
