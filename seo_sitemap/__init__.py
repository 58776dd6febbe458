"""XML sitemap, sitemap index and robots.txt generation (sitemaps.org protocol)."""

from .chunker import GENERATOR_VERSION, MAX_FILE_SIZE, MAX_URLS_PER_SITEMAP, Chunk, build_chunks
from .config import GeneratorConfig
from .errors import LengthError, PreconditionError, SitemapError, ValidationError
from .generator import SitemapGenerator
from .index import MAX_SITEMAPS_PER_INDEX, SitemapIndex, build_index
from .output import Artifact, SitemapBundle, assemble
from .ping import SEARCH_ENGINES, PingResult, submit_sitemap
from .records import MAX_URL_LENGTH, URLRecord, URLRecordStore
from .robots import update_robots_content
from .storage import FileStorage, write_bundle

__version__ = GENERATOR_VERSION

__all__ = [
    "Artifact",
    "Chunk",
    "FileStorage",
    "GeneratorConfig",
    "LengthError",
    "MAX_FILE_SIZE",
    "MAX_SITEMAPS_PER_INDEX",
    "MAX_URLS_PER_SITEMAP",
    "MAX_URL_LENGTH",
    "PingResult",
    "PreconditionError",
    "SEARCH_ENGINES",
    "SitemapBundle",
    "SitemapError",
    "SitemapGenerator",
    "SitemapIndex",
    "URLRecord",
    "URLRecordStore",
    "ValidationError",
    "assemble",
    "build_chunks",
    "build_index",
    "submit_sitemap",
    "update_robots_content",
    "write_bundle",
]
