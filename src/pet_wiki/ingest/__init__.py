"""Data import and maintenance for Pet Wiki."""

from pet_wiki.ingest.images import ImageFixStats, fix_image_paths
from pet_wiki.ingest.migrate import DataMigrator, MigrationStats
from pet_wiki.ingest.models import SPECIES_CONFIG, VALID_SPECIES

__all__ = [
    "DataMigrator",
    "MigrationStats",
    "ImageFixStats",
    "fix_image_paths",
    "SPECIES_CONFIG",
    "VALID_SPECIES",
]
