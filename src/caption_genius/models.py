"""
Alembic model import hook.

Importing this module ensures all SQLAlchemy models are registered on Base.metadata.
"""

from __future__ import annotations

# Import User first - other models have relationships to User
from caption_genius.modules.identity.models import Profile, User  # noqa: F401

from caption_genius.modules.captions.models import Caption  # noqa: F401
from caption_genius.modules.customization.models import AIConfiguration  # noqa: F401
from caption_genius.modules.niches.models import Niche  # noqa: F401
from caption_genius.modules.scheduling.models import ScheduledPost  # noqa: F401
from caption_genius.modules.usage.models import UsageLog  # noqa: F401
