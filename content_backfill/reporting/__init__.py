"""End-of-run reporting."""
