"""
API v1 Module
Contains all version 1 API endpoints.
"""

# Expose routers for easy import
from app.api.v1 import users, categories, projects, videos, images, files

__all__ = ["users", "categories", "projects", "videos", "images", "files"]
