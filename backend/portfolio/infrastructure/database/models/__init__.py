from .content_models import (
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

__all__ = [
    "BlogPostModel",
    "BrandModel",
    "ContactSubmissionModel",
    "EducationModel",
    "ExperienceModel",
    "ProfileModel",
    "SkillModel",
    "StatisticModel",
    "WorkModel",
]
