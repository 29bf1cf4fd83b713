import json
from pathlib import Path

import pytest

from bulktiles.errors import SourceNotFoundError
from bulktiles.metadata.core import SourcesConfiguration, parse_config
from bulktiles.providers.registry import (
    DEFAULT_SOURCE_ID,
    SourceRegistry,
    StartupFailure,
    open_store,
)


def test_single_store_is_default(single_tile_mbtiles: Path):
    registry = SourceRegistry.from_configuration(mbtiles=single_tile_mbtiles)

    descriptor = registry.resolve(DEFAULT_SOURCE_ID)

    assert descriptor.max_zoom == 10
    assert len(registry) == 1

    registry.close()


def test_config_sources(single_tile_mbtiles: Path, sources_config: Path):
    registry = SourceRegistry.from_configuration(
        mbtiles=single_tile_mbtiles, config=parse_config(sources_config)
    )

    assert "default" in registry
    assert "pyramid" in registry
    assert registry.resolve("pyramid").max_zoom == 12

    registry.close()


def test_config_entry_replaces_default(single_tile_mbtiles: Path, pyramid_mbtiles: Path):
    config = SourcesConfiguration.model_validate(
        {"sources": {"default": {"path": str(pyramid_mbtiles)}}}
    )

    registry = SourceRegistry.from_configuration(
        mbtiles=single_tile_mbtiles, config=config
    )

    assert len(registry) == 1
    assert registry.resolve("default").max_zoom == 12

    registry.close()


def test_unknown_source(single_tile_mbtiles: Path):
    registry = SourceRegistry.from_configuration(mbtiles=single_tile_mbtiles)

    with pytest.raises(SourceNotFoundError) as excinfo:
        registry.resolve("elsewhere")

    assert excinfo.value.message == "source 'elsewhere' not found"

    registry.close()


def test_unopenable_store_fails_startup(tmp_path: Path):
    with pytest.raises(StartupFailure):
        open_store("broken", tmp_path / "missing.mbtiles")


def test_one_bad_entry_fails_startup(tmp_path: Path, pyramid_mbtiles: Path):
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps(
            {
                "sources": {
                    "good": {"path": str(pyramid_mbtiles)},
                    "bad": {"path": str(tmp_path / "missing.mbtiles")},
                }
            }
        )
    )

    with pytest.raises(StartupFailure):
        SourceRegistry.from_configuration(config=parse_config(config))


def test_empty_registry():
    registry = SourceRegistry.from_configuration()

    assert len(registry) == 0
