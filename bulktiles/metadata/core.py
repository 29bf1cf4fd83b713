from pathlib import Path

import structlog
from pydantic import BaseModel


class SourceConfiguration(BaseModel):
    path: Path


class SourcesConfiguration(BaseModel):
    sources: dict[str, SourceConfiguration] = {}


def parse_config(config: Path) -> SourcesConfiguration:
    log = structlog.get_logger()
    log = log.bind(config_path=str(config))

    with open(config, "r") as handle:
        sources = SourcesConfiguration.model_validate_json(handle.read())

    log = log.bind(sources=len(sources.sources))
    log.info("config.parsed")

    return sources
