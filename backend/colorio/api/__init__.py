"""Color.io HTTP routers."""
