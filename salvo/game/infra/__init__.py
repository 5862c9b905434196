"""Environment, paths and logging policy."""
