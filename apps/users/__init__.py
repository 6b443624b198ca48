"""Users app: club members, yacht owners, service providers and admins."""
