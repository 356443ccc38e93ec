"""Data models for isicreate."""
from isicreate.models.request import PackageManager, ProjectRequest

__all__ = [
    'PackageManager',
    'ProjectRequest',
]
