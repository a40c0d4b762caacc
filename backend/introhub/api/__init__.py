"""HTTP surface — routers, dependencies and global error handlers."""
