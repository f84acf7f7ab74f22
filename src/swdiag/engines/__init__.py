"""Score matrix fills and their reduction to diagonal profiles."""
