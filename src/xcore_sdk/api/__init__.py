"""API groups, one per area of the client-server API."""
