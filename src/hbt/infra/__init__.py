"""Infrastructure: database wiring and repositories."""
