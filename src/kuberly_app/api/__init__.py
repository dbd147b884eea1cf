"""HTTP API: routes, lifespan and dependency wiring."""
