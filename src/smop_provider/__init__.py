"""Bridge between the SMoP secrets backend and generic secret-store consumers."""
