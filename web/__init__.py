"""Web front end: dashboard pages and the /api proxy."""
