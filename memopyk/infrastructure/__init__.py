"""Infrastructure : persistance SQLModel."""
