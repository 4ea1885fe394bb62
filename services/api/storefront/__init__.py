"""Storefront core: cart consolidation and the community feed."""
