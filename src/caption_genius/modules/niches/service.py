from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from caption_genius.modules.niches.models import Niche

# (slug, name, icon)
DEFAULT_NICHES: tuple[tuple[str, str, str], ...] = (
    ("yoga", "Yoga Studio", "\U0001f9d8"),
    ("coffee", "Indie Coffee Shop", "☕"),
    ("fitness", "Fitness Trainer", "\U0001f4aa"),
    ("photography", "Photography", "\U0001f4f8"),
    ("salon", "Hair Salon", "\U0001f487"),
    ("food", "Food Blogger", "\U0001f37d️"),
)


def list_niches(session: Session, *, include_inactive: bool = False) -> list[Niche]:
    stmt = select(Niche).order_by(Niche.name.asc())
    if not include_inactive:
        stmt = stmt.where(Niche.is_active.is_(True))
    return list(session.scalars(stmt))


def resolve_niche(session: Session, *, name: str) -> Niche | None:
    """Exact name lookup among active niches."""
    return session.scalar(
        select(Niche).where(Niche.name == name.strip(), Niche.is_active.is_(True))
    )


def seed_default_niches(session: Session) -> int:
    existing = set(session.scalars(select(Niche.slug)))
    created = 0
    for slug, name, icon in DEFAULT_NICHES:
        if slug in existing:
            continue
        session.add(Niche(slug=slug, name=name, icon=icon, is_active=True))
        created += 1
    if created:
        session.commit()
    return created
