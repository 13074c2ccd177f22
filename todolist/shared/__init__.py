"""Code shared by every front end: core primitives, domain and infrastructure."""
