"""HTTP routers for the adapters layer."""
