"""menuscan - restaurant menu discovery data layer.

Read-through TTL caches, catalog services and backend adapters used by the
customer and restaurant-operator screens.
"""

__version__ = "0.1.0"
