"""Core client logic: configuration, HTTP access, tasks, and accounts."""
