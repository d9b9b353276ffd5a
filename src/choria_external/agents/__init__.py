"""Agent implementations bundled with choria_external."""
