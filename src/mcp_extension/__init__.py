"""
MCP extension scaffold.

Tools and resources exposed to an MCP host through a discovered capability
registry, with collaborators injected by a service container.
"""

__version__ = "0.1.0"
