# File: reffinder/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. All feature models (AssetModel, ...) inherit from this.
Base = declarative_base()
