"""Web layer of the reference manager."""
