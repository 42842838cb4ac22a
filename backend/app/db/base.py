"""
Declarative base shared by every table, including the project_categories
association table. Models inherit it through app.models.base.BaseModel.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
