"""Domain applications of the room booking backend."""
