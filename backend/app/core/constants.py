"""
Application Constants
Defines constant values used throughout the application.
"""

# Pagination
DEFAULT_PAGE_SIZE = 10  # Default number of projects per page
MAX_PAGE_SIZE = 100  # Maximum items per page

# Project name typeahead
NAME_SUGGESTION_LIMIT = 5

# Column lengths shared by models and schemas
CATEGORY_NAME_LENGTH = 100
CATEGORY_LINK_LENGTH = 15
CATEGORY_DESCRIPTION_LENGTH = 200
PROJECT_NAME_LENGTH = 255

# Media types accepted when registering stored files
VIDEO_EXTENSIONS = {".mp4", ".webm", ".mov", ".mkv"}
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}
