"""Patient Care MCP server.

This package exposes patient-care operations (patients, care plans,
progress notes, appointments) as Model Context Protocol tools over a
JSON-RPC 2.0 HTTP endpoint, plus a bridge process that lets stdio-based
MCP clients reach that endpoint.
"""
