"""
Demo catalogue: one sample user and three published San Francisco routes.
Loaded at startup when SEED_DEMO_DATA is enabled.
"""
from models.Route import Route
from models.RouteStop import RouteStop
from models.User import User
from database import utcnow
from store import EntityStore
from utils.logger import get_logger

logger = get_logger("seed")

DEMO_USER = {
    "id": "user-1",
    "username": "alexchen",
    "email": "alex@example.com",
    "name": "Alex Chen",
    "profile_image": "https://images.unsplash.com/photo-1535713875002-d1d0cf377fde?ixlib=rb-4.0.3&w=120&h=120&fit=crop&crop=face",
    "location": "San Francisco, CA",
}

DEMO_ROUTES = [
    {
        "id": "route-1",
        "title": "Mission District Street Art",
        "description": "Explore vibrant murals and local culture",
        "long_description": "Discover the vibrant street art scene in San Francisco's Mission District. This curated walking tour takes you through colorful murals, local galleries, and cultural landmarks that showcase the neighborhood's rich artistic heritage.",
        "category": "culture-art",
        "hero_image": "https://images.unsplash.com/photo-1449824913935-59a10b8d2000?ixlib=rb-4.0.3&w=400&h=200&fit=crop",
        "duration": 150,
        "distance": 3.2,
        "difficulty": "easy",
        "rating": 4.8,
        "review_count": 124,
        "stops": [
            {
                "id": "stop-1",
                "name": "Balmy Alley Murals",
                "description": "Historic mural alley with political art",
                "image": "https://images.unsplash.com/photo-1541961017774-22349e4a1262?ixlib=rb-4.0.3&w=80&h=80&fit=crop",
                "latitude": 37.748,
                "longitude": -122.415,
                "order": 1,
                "estimated_time_minutes": 20,
            },
            {
                "id": "stop-2",
                "name": "Mission Dolores Park",
                "description": "Panoramic city views and local culture",
                "image": "https://images.unsplash.com/photo-1515003197210-e0cd71810b5f?ixlib=rb-4.0.3&w=80&h=80&fit=crop",
                "latitude": 37.760,
                "longitude": -122.427,
                "order": 2,
                "estimated_time_minutes": 30,
            },
        ],
    },
    {
        "id": "route-2",
        "title": "Ferry Building Food Tour",
        "description": "Taste local flavors and artisan foods",
        "long_description": "Experience the best of San Francisco's culinary scene at the iconic Ferry Building Marketplace. Sample artisan cheeses, fresh produce, and local specialties while learning about the city's food culture.",
        "category": "food-drink",
        "hero_image": "https://images.unsplash.com/photo-1555939594-58d7cb561ad1?ixlib=rb-4.0.3&w=400&h=200&fit=crop",
        "duration": 90,
        "distance": 1.8,
        "difficulty": "easy",
        "rating": 4.9,
        "review_count": 89,
        "stops": [
            {
                "id": "stop-3",
                "name": "Ferry Building Marketplace",
                "description": "Historic marketplace with local vendors",
                "image": "https://images.unsplash.com/photo-1555939594-58d7cb561ad1?ixlib=rb-4.0.3&w=80&h=80&fit=crop",
                "latitude": 37.795,
                "longitude": -122.393,
                "order": 1,
                "estimated_time_minutes": 45,
            },
        ],
    },
    {
        "id": "route-3",
        "title": "Hidden Gardens & Secret Spots",
        "description": "Discover SF's best-kept secrets",
        "long_description": "Uncover San Francisco's hidden gems - secret gardens, quiet viewpoints, and lesser-known architectural treasures that most visitors never see.",
        "category": "hidden-gems",
        "hero_image": "https://images.unsplash.com/photo-1441974231531-c6227db76b6e?ixlib=rb-4.0.3&w=400&h=200&fit=crop",
        "duration": 180,
        "distance": 4.1,
        "difficulty": "moderate",
        "rating": 4.7,
        "review_count": 67,
        "stops": [
            {
                "id": "stop-4",
                "name": "Secret Garden",
                "description": "Hidden oasis in the heart of the city",
                "image": "https://images.unsplash.com/photo-1441974231531-c6227db76b6e?ixlib=rb-4.0.3&w=80&h=80&fit=crop",
                "latitude": 37.773,
                "longitude": -122.431,
                "order": 1,
                "estimated_time_minutes": 30,
            },
        ],
    },
]


def seed_demo_data(store: EntityStore) -> None:
    """Insert the demo user and routes unless they are already there."""
    if store.get(User, DEMO_USER["id"]) is not None:
        return

    with store.session() as db:
        db.add(User(created_at=utcnow(), **DEMO_USER))
        for data in DEMO_ROUTES:
            route = dict(data)
            stops = [RouteStop(**stop) for stop in route.pop("stops")]
            db.add(Route(stops=stops, is_published=True, created_by=DEMO_USER["id"], created_at=utcnow(), **route))

    logger.info("Seeded demo user and %d routes", len(DEMO_ROUTES))
