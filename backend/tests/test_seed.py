from models.product import Product
from populate_db import seed
from services.image_service import resolve_cover_image


def test_seed_is_idempotent(db_session):
    first = seed(db_session)
    second = seed(db_session)

    assert first == {"users": 1, "categories": 2, "products": 3}
    assert second == {"users": 0, "categories": 0, "products": 0}


def test_seeded_products_fall_back_to_placeholder(db_session):
    seed(db_session)

    chess = db_session.query(Product).filter_by(name="Chess").one()
    assert chess.images == []
    assert chess.image is None
    assert resolve_cover_image(chess, "/static/placeholder.png") == "/static/placeholder.png"


def test_seeded_products_are_served_with_placeholder_cover(client, session_factory):
    db = session_factory()
    try:
        seed(db)
    finally:
        db.close()

    covers = {p["name"]: p["cover_image"] for p in client.get("/products").json()}
    assert covers == {
        "Chess": "/static/placeholder.png",
        "Checkers": "/static/placeholder.png",
        "Python Tricks": "/static/placeholder.png",
    }
