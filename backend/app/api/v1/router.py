"""
API v1 Main Router
Aggregates all v1 API endpoints into a single router.

Structure:
- /users/* - User accounts (register, profile, delete)
- /categories/* - Category CRUD and video thumbnails
- /projects/* - Project listing, search, detail and CRUD
- /videos/* - Video registration, streaming, deletion
- /images/* - Thumbnail and gallery images
- /files/* - Media directory maintenance
"""

from fastapi import APIRouter

from app.api.v1 import users, categories, projects, videos, images, files


# Create main v1 router
# This router will be included in main.py with prefix /api/v1
api_router = APIRouter()


# Include user endpoints
# Endpoints: POST /users, GET/PUT/DELETE /users/me, GET /users/{id}
# Registration is public, everything else requires authentication
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)


# Include categories endpoints
# Endpoints: POST/GET /categories, GET /categories/{link}, PUT/DELETE /categories/{id}
# Reads are public, writes require the category creator
api_router.include_router(
    categories.router,
    # prefix is already defined in categories.router (/categories)
    tags=["Categories"],
)


# Include projects endpoints
# Endpoints: POST/GET /projects, GET /projects/names, /search, /user/{id}, /category/{link}
# GET/PUT/DELETE /projects/{id}
# Reads are public, update/delete require the project author
api_router.include_router(
    projects.router,
    # prefix is already defined in projects.router (/projects)
    tags=["Projects"],
)


# Include media endpoints
# Endpoints: POST /videos, GET /videos/{id}, GET /videos/{id}/file, DELETE /videos/{id}
# (same shape for /images)
api_router.include_router(
    videos.router,
    tags=["Videos"],
)

api_router.include_router(
    images.router,
    tags=["Images"],
)


# Include maintenance endpoints
# Endpoints: POST /files/cleanup
# Requires authentication
api_router.include_router(
    files.router,
    tags=["Files"],
)
