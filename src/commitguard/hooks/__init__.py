"""Git hook installation."""
