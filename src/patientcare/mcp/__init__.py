"""Model Context Protocol tool layer.

Exposes the patient-care operations as JSON-RPC "tools":

- models.py:     Tool descriptors and JSON-RPC envelopes
- registry.py:   Build-once table of tools, keyed by name
- schema.py:     Input schema generation for tools/list
- binder.py:     Coerces raw request arguments to typed values
- invoker.py:    Calls a tool and turns the outcome into text
- dispatcher.py: Routes initialize / tools/list / tools/call
- errors.py:     Exception types and JSON-RPC error codes
"""
