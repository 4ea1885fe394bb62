"""Business logic services.

Services contain all merge and pagination logic and are called by the request layer.
Services accept their store and cache gateways explicitly.
"""
