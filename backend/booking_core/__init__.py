"""Domain core: actors, errors, atomic writes, booking coordinator, approvals, discovery."""
