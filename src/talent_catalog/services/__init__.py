"""Remote client, catalog filtering and summary rendering."""
