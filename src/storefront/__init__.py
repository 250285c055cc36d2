"""Storefront: product catalogue, session carts, checkout and order history."""
