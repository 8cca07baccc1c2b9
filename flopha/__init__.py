"""flopha: pattern-driven version tags and branches for git repositories."""
