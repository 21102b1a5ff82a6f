"""Feature modules for neo-session."""
