"""Recipe browser backend."""
