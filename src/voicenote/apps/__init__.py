"""Terminal application layer: CLI, config, host and rendering."""
