"""Core building blocks shared by neo-session features."""
