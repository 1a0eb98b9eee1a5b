"""HTTP API — FastAPI server, context manifest, and narrative generation."""
