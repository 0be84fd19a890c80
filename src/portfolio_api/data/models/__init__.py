"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- User: Account credentials, the owner of every other row
- UserProfile: One-per-user public profile
- Skill: Skills with icons, taggable onto other entries
- Experience / ExperienceSkill: Work history and its skill tags
- Education: Educational history
- Certification / CertificationSkill: Certifications and their skill tags
- Project / ProjectSkill: Project write-ups and their skill tags

All models inherit from the shared Base declarative class defined in data.db.
"""

from portfolio_api.data.db import Base
from portfolio_api.data.models.certification import Certification, CertificationSkill
from portfolio_api.data.models.education import Education
from portfolio_api.data.models.experience import Experience, ExperienceSkill
from portfolio_api.data.models.project import Project, ProjectSkill
from portfolio_api.data.models.skill import Skill
from portfolio_api.data.models.user import User
from portfolio_api.data.models.user_profile import UserProfile

__all__ = [
    "Base",
    "Certification",
    "CertificationSkill",
    "Education",
    "Experience",
    "ExperienceSkill",
    "Project",
    "ProjectSkill",
    "Skill",
    "User",
    "UserProfile",
]
