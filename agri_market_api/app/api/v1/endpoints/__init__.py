"""
Endpoint subpackage for the API.

Each module in this package defines an APIRouter for one entity family
(users, products, services, orders, reviews, testimonials) plus the
seeding route.  The routers are aggregated in ``router.py``.
"""
