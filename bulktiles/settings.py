"""
Settings for the project.
"""

from pathlib import Path
from typing import Literal

from fastapi import FastAPI
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 3000

    mbtiles: Path | None = None
    "A single MBTiles file, served as the 'default' source."
    config_path: Path | None = None
    "JSON file of the form {'sources': {'<id>': {'path': '<store-path>'}}}."

    min_zoom: int = 10
    "Requests for tiles below this zoom level are rejected."

    # Size cache settings
    size_cache_type: Literal["in_memory", "pass_through"] = "in_memory"
    "Type of cache used to answer HEAD requests without building the archive."
    size_cache_max_entries: int | None = None
    "Bound on the number of cached sizes. None keeps every size for the life of the process."

    fetch_concurrency: int = 1
    "Number of tile reads in flight at once for a single request."
    archive_mtime: int = 0
    "Modification time stamped on every archive entry."

    log_level: str = "INFO"

    class Config:
        env_prefix = "BULKTILES_"

    def create_size_cache(self):
        """
        Create a size cache instance based on the settings.
        """
        from bulktiles.providers.caching import InMemorySizeCache, PassThroughSizeCache

        if self.size_cache_type == "in_memory":
            return InMemorySizeCache(max_entries=self.size_cache_max_entries)
        else:
            return PassThroughSizeCache()

    def create_registry(self):
        from bulktiles.providers.registry import SourceRegistry

        return SourceRegistry.from_configuration(
            mbtiles=self.mbtiles, config=self.parse_config()
        )

    def setup_app(self, app: FastAPI):
        from bulktiles.processing.bundler import Bundler

        # An empty registry (closed by a previous lifespan) is rebuilt.
        if not getattr(app, "registry", None):
            app.registry = self.create_registry()

        app.sizes = self.create_size_cache()
        app.bundler = Bundler(
            registry=app.registry,
            sizes=app.sizes,
            min_zoom=self.min_zoom,
            fetch_concurrency=self.fetch_concurrency,
            archive_mtime=self.archive_mtime,
        )

        return app

    def parse_config(self):
        from bulktiles.metadata.core import parse_config

        if self.config_path is None:
            return None

        return parse_config(self.config_path)


settings = Settings()
