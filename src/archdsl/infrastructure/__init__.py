"""Infrastructure layer: interpreter-level adapters."""
