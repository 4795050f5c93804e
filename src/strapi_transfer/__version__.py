"""Version information for strapi-transfer."""

__version__ = "0.1.0"
