from .base import Base
from .models import (
    BlogPostModel,
    BrandModel,
    ContactSubmissionModel,
    EducationModel,
    ExperienceModel,
    ProfileModel,
    SkillModel,
    StatisticModel,
    WorkModel,
)
from .session import build_engine, build_session_factory, dispose_engine, get_engine, get_session_factory
from .table_gateway import SQLAlchemyTableGateway

__all__ = [
    "Base",
    "BlogPostModel",
    "BrandModel",
    "ContactSubmissionModel",
    "EducationModel",
    "ExperienceModel",
    "ProfileModel",
    "SkillModel",
    "StatisticModel",
    "WorkModel",
    "build_engine",
    "build_session_factory",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
    "SQLAlchemyTableGateway",
]
