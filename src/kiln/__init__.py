"""
kiln - Build pipeline for packaging a desktop application

Drives external tools in a fixed order:
- LESS stylesheet compilation, skipped when compiled output is fresh
- Script bundling with minification (production) or inline source maps (development)
- Asset injection into the HTML shell
- Environment marker for the running application
- Platform-specific distributable archive
"""

__version__ = "0.1.0"
__package_name__ = "kiln"
__short_name__ = "kiln"
