from __future__ import annotations

"""
Unit tests for the Build Configuration Scraper.
"""

from pathlib import Path

from next_introspect.core.services.config_scraper import (
    find_config_file,
    parse_next_config,
    scrape_config_source,
)

_CONFIG = """
/** @type {import('next').NextConfig} */
const nextConfig = {
  basePath: '/docs',
  distDir: "build",
  trailingSlash: true,
  images: {
    domains: ['images.example.com', "cdn.example.com"],
  },
  env: {
    API_URL: 'https://api.example.com',
  },
  experimental: {
    optimizeCss: true,
    serverMinification: false,
  },
};
module.exports = nextConfig;
"""


def test_scrape_known_keys() -> None:
    config = scrape_config_source(_CONFIG)

    assert config["basePath"] == "/docs"
    assert config["distDir"] == "build"
    assert config["trailingSlash"] is True
    assert config["images"] == {"domains": ["images.example.com", "cdn.example.com"]}
    assert config["env"] == {"API_URL": "https://api.example.com"}
    assert config["experimental"] == {"optimizeCss": True, "serverMinification": False}


def test_scrape_empty_source() -> None:
    assert scrape_config_source("module.exports = {}") == {}


def test_config_file_priority(tmp_path: Path) -> None:
    (tmp_path / "next.config.ts").write_text("", encoding="utf-8")
    (tmp_path / "next.config.js").write_text("", encoding="utf-8")
    assert find_config_file(str(tmp_path)) == str(tmp_path / "next.config.js")


def test_parse_with_middleware(tmp_path: Path) -> None:
    (tmp_path / "next.config.js").write_text(_CONFIG, encoding="utf-8")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "middleware.ts").write_text("", encoding="utf-8")

    config = parse_next_config(str(tmp_path))
    assert config is not None
    assert config["hasMiddleware"] is True
    assert config["basePath"] == "/docs"


def test_no_config_file(tmp_path: Path) -> None:
    assert parse_next_config(str(tmp_path)) is None

    (tmp_path / "middleware.js").write_text("", encoding="utf-8")
    assert parse_next_config(str(tmp_path)) == {"hasMiddleware": True}
