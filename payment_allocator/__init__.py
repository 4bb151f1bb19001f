"""Payment allocator: settles a batch of orders across discounted payment methods."""
