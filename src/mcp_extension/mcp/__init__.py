"""
MCP integration: capabilities, structured responses, composition root and server.
"""
