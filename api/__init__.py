"""HTTP/WebSocket transport for the Grid Arena engine."""
