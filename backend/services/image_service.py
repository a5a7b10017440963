# backend/services/image_service.py
"""
Keeps a product's image gallery, its primary image and the legacy
``Product.image`` field consistent with each other.

Writing: ``set_images`` replaces the whole gallery. Position 0 becomes the
primary image and its URL is copied into ``Product.image``. An empty list is a
no-op, so updates without new files leave the gallery alone.

Reading: ``resolve_cover_image`` is the one place that decides which picture
represents a product.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from models.product import Product, ProductImage

logger = logging.getLogger(__name__)


def set_images(db: Session, product: Product, urls: List[str]) -> List[str]:
    """
    Replace the gallery of ``product`` with ``urls`` (in order).

    Must run inside the caller's transaction. Returns the URLs that are no
    longer referenced so the caller can drop the stored files after commit.
    """
    if not urls:
        return []

    old_urls = {img.url for img in product.images}
    if product.image:
        old_urls.add(product.image)

    # Old rows go first; the new set is inserted as if the product were fresh
    product.images.clear()
    product.primary_image_id = None
    db.flush()

    new_images = [ProductImage(url=url, position=index) for index, url in enumerate(urls)]
    product.images.extend(new_images)
    db.flush()

    primary = new_images[0]
    product.primary_image_id = primary.id
    product.image = primary.url

    logger.info("Product %s: %d image(s) set, primary=%s", product.id, len(new_images), primary.url)
    return sorted(old_urls - set(urls))


def resolve_cover_image(product: Product, default: Optional[str] = None) -> Optional[str]:
    """Primary image, else first image by position, else legacy image, else ``default``."""
    images = sorted(product.images, key=lambda img: (img.position, img.id or 0))

    primary = next((img for img in images if img.is_primary), None)
    if primary is not None:
        return primary.url
    if images:
        return images[0].url
    if product.image:
        return product.image
    return default
