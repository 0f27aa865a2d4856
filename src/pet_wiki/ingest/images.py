"""Rewrite stored image paths to root-relative URLs."""

from dataclasses import dataclass

from pet_wiki.db.repo import Repository
from pet_wiki.utils.logging import get_logger
from pet_wiki.utils.text import normalize_image_path

logger = get_logger(__name__)


@dataclass
class ImageFixStats:
    """Number of rows whose image paths were rewritten."""

    pets: int = 0
    categories: int = 0
    blog_posts: int = 0

    @property
    def total(self) -> int:
        return self.pets + self.categories + self.blog_posts


def fix_image_paths(repo: Repository) -> ImageFixStats:
    """
    Prefix relative image paths with ``/``.

    Covers pet primary images and galleries, category images and blog
    card/hero images. Remote URLs and already-rooted paths are left as-is.

    Args:
        repo: Repository bound to an open session

    Returns:
        ImageFixStats with per-table counts of changed rows
    """
    stats = ImageFixStats()

    pets = repo.get_pets_with_images()
    logger.info(f"Found {len(pets)} pets with images")
    for pet in pets:
        changed = False

        primary = normalize_image_path(pet.primary_image)
        if primary != pet.primary_image:
            pet.primary_image = primary
            changed = True

        if pet.gallery:
            gallery = [normalize_image_path(path) for path in pet.gallery if isinstance(path, str)]
            if gallery != pet.gallery:
                pet.gallery = gallery
                changed = True

        if changed:
            repo.session.add(pet)
            stats.pets += 1
            logger.debug(f"Fixed image paths for pet: {pet.name}")

    for category in repo.list_categories():
        image = normalize_image_path(category.image)
        if image != category.image:
            category.image = image
            repo.session.add(category)
            stats.categories += 1
            logger.debug(f"Fixed category image for: {category.name}")

    for post in repo.list_blog_posts():
        card = normalize_image_path(post.card_image)
        hero = normalize_image_path(post.hero_image)
        if card != post.card_image or hero != post.hero_image:
            post.card_image = card
            post.hero_image = hero
            repo.session.add(post)
            stats.blog_posts += 1
            logger.debug(f"Fixed blog post images for: {post.title}")

    repo.session.flush()
    logger.info(f"Fixed image paths on {stats.total} rows")
    return stats
