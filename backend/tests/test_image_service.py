from models.product import Product, ProductImage
from services.catalog_service import CatalogService
from services.image_service import set_images, resolve_cover_image

PLACEHOLDER = "/static/placeholder.png"


def _product(db_session, **extra):
    product = Product(name="Chess", price=10.0, stock=5, **extra)
    db_session.add(product)
    db_session.flush()
    return product


def test_set_images_marks_first_as_primary_and_syncs_legacy_field(db_session):
    product = _product(db_session)
    urls = ["/uploads/a.png", "/uploads/b.png", "/uploads/c.png"]

    set_images(db_session, product, urls)
    db_session.commit()
    db_session.refresh(product)

    assert [img.url for img in product.images] == urls
    assert [img.position for img in product.images] == [0, 1, 2]
    primaries = [img for img in product.images if img.is_primary]
    assert len(primaries) == 1
    assert primaries[0].position == 0
    assert product.image == primaries[0].url == "/uploads/a.png"


def test_set_images_with_empty_list_changes_nothing(db_session):
    product = _product(db_session)
    set_images(db_session, product, ["/uploads/a.png", "/uploads/b.png"])
    db_session.commit()

    replaced = set_images(db_session, product, [])
    db_session.commit()
    db_session.refresh(product)

    assert replaced == []
    assert [img.url for img in product.images] == ["/uploads/a.png", "/uploads/b.png"]
    assert product.image == "/uploads/a.png"


def test_set_images_replaces_the_whole_gallery(db_session):
    product = _product(db_session)
    set_images(db_session, product, ["/uploads/a.png", "/uploads/b.png"])
    db_session.commit()

    replaced = set_images(db_session, product, ["/uploads/c.png"])
    db_session.commit()
    db_session.refresh(product)

    assert replaced == ["/uploads/a.png", "/uploads/b.png"]
    assert [img.url for img in product.images] == ["/uploads/c.png"]
    assert product.images[0].is_primary
    assert product.image == "/uploads/c.png"
    assert db_session.query(ProductImage).count() == 1


def test_update_without_images_keeps_gallery(db_session):
    catalog = CatalogService(db_session)
    product = catalog.create_product({"name": "Chess", "price": 10.0}, ["/uploads/a.png"])

    updated, replaced = catalog.update_product(product.id, {"price": 12.5}, [])

    assert replaced == []
    assert updated.price == 12.5
    assert [img.url for img in updated.images] == ["/uploads/a.png"]
    assert updated.image == "/uploads/a.png"


def test_cover_image_prefers_primary():
    product = Product(name="Chess", price=1.0, image="/legacy.png", primary_image_id=2)
    product.images = [
        ProductImage(id=1, url="/uploads/first.png", position=0),
        ProductImage(id=2, url="/uploads/primary.png", position=1),
    ]
    assert resolve_cover_image(product, PLACEHOLDER) == "/uploads/primary.png"


def test_cover_image_falls_back_to_first_by_position_without_primary():
    product = Product(name="Chess", price=1.0, image="/legacy.png", primary_image_id=None)
    product.images = [
        ProductImage(id=5, url="/uploads/second.png", position=1),
        ProductImage(id=6, url="/uploads/first.png", position=0),
    ]
    assert resolve_cover_image(product, PLACEHOLDER) == "/uploads/first.png"


def test_cover_image_falls_back_to_legacy_then_default():
    legacy_only = Product(name="Chess", price=1.0, image="/legacy.png")
    nothing = Product(name="Chess", price=1.0)

    assert resolve_cover_image(legacy_only, PLACEHOLDER) == "/legacy.png"
    assert resolve_cover_image(nothing, PLACEHOLDER) == PLACEHOLDER
    assert resolve_cover_image(nothing) is None
