"""In-memory RBAC admin console: users, roles and permissions."""
