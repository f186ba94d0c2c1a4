"""Library API: a REST backend for a lending library."""
