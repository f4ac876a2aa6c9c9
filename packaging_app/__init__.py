"""
Packaging configurator service.

Computes units per box, pallet layer and pallet for a product, with weight,
cost and production timeline projections, and stores named configurations
per product and user.
"""
