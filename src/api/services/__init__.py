"""Services backing the API routers."""
