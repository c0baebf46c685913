"""Password hashing, bearer tokens and account operations."""
