"""HTTP API for infofinder lookups."""
