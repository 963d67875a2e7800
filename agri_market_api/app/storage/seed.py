"""
Demonstration dataset.

``seed_storage`` inserts three farmers, one service provider, four
products, one transportation service and two approved testimonials
through the regular ``create_*`` operations, wiring the foreign keys
from the ids the storage hands back.

Seeding is NOT idempotent.  Running it twice against a
``DatabaseStorage`` fails with ``sqlite3.IntegrityError`` on the
duplicate usernames; against a ``MemStorage`` it inserts a second copy
of everything.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List

from ..core.security import hash_password
from ..schemas.product import ProductCreate
from ..schemas.service import ServiceCreate
from ..schemas.testimonial import TestimonialCreate
from ..schemas.user import UserCreate

if TYPE_CHECKING:
    from .base import Storage

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "password123"

SAMPLE_USERS: List[Dict[str, Any]] = [
    {
        "username": "sharma_farms",
        "email": "sharma@example.com",
        "phone": "9876543210",
        "full_name": "Sharma Organic Farms",
        "role": "farmer",
        "address": "123 Farm Road",
        "city": "Mumbai",
        "state": "Maharashtra",
        "bio": "Growing organic vegetables since 1995",
    },
    {
        "username": "singh_family",
        "email": "singh@example.com",
        "phone": "9876543211",
        "full_name": "Singh Family Farms",
        "role": "farmer",
        "address": "456 Wheat Field",
        "city": "Amritsar",
        "state": "Punjab",
        "bio": "Premium wheat growers",
    },
    {
        "username": "himalayan_orchards",
        "email": "himalayan@example.com",
        "phone": "9876543212",
        "full_name": "Himalayan Orchards",
        "role": "farmer",
        "address": "789 Mountain Road",
        "city": "Shimla",
        "state": "Himachal Pradesh",
        "bio": "Fresh mountain fruits",
    },
    {
        "username": "fast_logistics",
        "email": "logistics@example.com",
        "phone": "9876543213",
        "full_name": "Fast Logistics",
        "role": "service_provider",
        "address": "101 Transport Nagar",
        "city": "Delhi",
        "state": "Delhi",
        "bio": "Reliable transport services",
    },
]

# ``owner`` indexes into SAMPLE_USERS
SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "owner": 0,
        "title": "Fresh Tomatoes",
        "description": "Organically grown, rich in flavor and nutrients",
        "category": "vegetables",
        "price": "45",
        "unit": "kg",
        "quantity": "500",
        "location": "Mumbai, Maharashtra",
        "is_certified": True,
        "is_organic": True,
        "is_premium": True,
        "rating": "4.8",
        "images": ["https://images.unsplash.com/photo-1603048719539-9ecb1b68901a"],
    },
    {
        "owner": 1,
        "title": "Organic Wheat",
        "description": "Premium quality wheat grown without pesticides",
        "category": "grains",
        "price": "32",
        "unit": "kg",
        "quantity": "1000",
        "location": "Amritsar, Punjab",
        "is_certified": True,
        "is_organic": True,
        "is_premium": False,
        "rating": "4.6",
        "images": ["https://images.unsplash.com/photo-1619566636858-adf3ef46400b"],
    },
    {
        "owner": 2,
        "title": "Himalayan Apples",
        "description": "Sweet and juicy apples from the Himalayan orchards",
        "category": "fruits",
        "price": "120",
        "unit": "kg",
        "quantity": "300",
        "location": "Shimla, Himachal Pradesh",
        "rating": "4.9",
        "images": ["https://images.unsplash.com/photo-1550258987-190a2d41a8ba"],
    },
    {
        "owner": 1,
        "title": "Basmati Rice",
        "description": "Aromatic long-grain basmati rice",
        "category": "grains",
        "price": "85",
        "unit": "kg",
        "quantity": "800",
        "location": "Amritsar, Punjab",
        "rating": "4.7",
        "images": ["https://images.unsplash.com/photo-1601493700625-9256e9af8fbd"],
    },
]

SAMPLE_SERVICES: List[Dict[str, Any]] = [
    {
        "owner": 3,
        "title": "Fast Transport Services",
        "description": "Reliable and quick transportation of agricultural products",
        "service_type": "transportation",
        "price": "1500",
        "pricing_unit": "per trip",
        "location": "Delhi",
        "availability": "Monday to Saturday",
        "rating": "4.5",
    },
]

SAMPLE_TESTIMONIALS: List[Dict[str, Any]] = [
    {
        "owner": 0,
        "content": (
            "Before Digi Fasal, I had to rely on middlemen who took most of my profits. "
            "Now I sell directly to buyers and have increased my income by 40%. The "
            "platform is easy to use even for someone like me who isn't tech-savvy."
        ),
        "rating": 5,
        "is_approved": True,
    },
    {
        "owner": 3,
        "content": (
            "I registered my transport service on Digi Fasal and now my trucks are always "
            "booked. The platform has simplified finding clients and managing schedules. "
            "My business has grown 25% in just six months."
        ),
        "rating": 5,
        "is_approved": True,
    },
]


def seed_storage(storage: Storage) -> Dict[str, list]:
    """Insert the demonstration dataset and return the created records.

    Returns a dict with ``users``, ``products``, ``services`` and
    ``testimonials`` lists in insertion order.
    """
    users = [
        storage.create_user(UserCreate(password=hash_password(SAMPLE_PASSWORD), **fields))
        for fields in SAMPLE_USERS
    ]

    products = []
    for fields in SAMPLE_PRODUCTS:
        fields = dict(fields)
        owner = users[fields.pop("owner")]
        products.append(storage.create_product(ProductCreate(farmer_id=owner.id, **fields)))

    services = []
    for fields in SAMPLE_SERVICES:
        fields = dict(fields)
        owner = users[fields.pop("owner")]
        services.append(storage.create_service(ServiceCreate(provider_id=owner.id, **fields)))

    testimonials = []
    for fields in SAMPLE_TESTIMONIALS:
        fields = dict(fields)
        owner = users[fields.pop("owner")]
        testimonials.append(
            storage.create_testimonial(TestimonialCreate(user_id=owner.id, **fields))
        )

    logger.info(
        "Seeded %d users, %d products, %d services, %d testimonials",
        len(users),
        len(products),
        len(services),
        len(testimonials),
    )
    return {
        "users": users,
        "products": products,
        "services": services,
        "testimonials": testimonials,
    }
