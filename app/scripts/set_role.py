"""
Set a profile's role (e.g. promote the first admin after they sign up). Run from project root:
  python -m app.scripts.set_role EMAIL ROLE [--deactivate | --activate]
Example:
  python -m app.scripts.set_role alice@example.com admin
"""
import argparse
import logging
import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.models import ActivityLog, Profile
from app.models.profile import PROFILE_ROLES

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def set_role(db: Session, email: str, role: str, is_active: bool | None = None) -> Profile | None:
    """
    Update role (and optionally is_active) for the single profile with this email.

    Runs outside the request policies: this is the operator bootstrap path.
    Returns None when no profile matches.
    """
    profile = db.scalars(select(Profile).where(Profile.email == email)).first()
    if profile is None:
        return None
    changes: dict[str, object] = {"role": role}
    if is_active is not None:
        changes["is_active"] = is_active
    for field, value in changes.items():
        setattr(profile, field, value)
    # No acting identity on the CLI path, so the audit actor is left empty.
    db.add(
        ActivityLog(
            user_id=None,
            action="user_updated",
            entity_type="user",
            entity_id=profile.id,
            details={"changes": sorted(changes), "source": "cli"},
        )
    )
    db.commit()
    return profile


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Set a user's role (operator bootstrap, no API auth).")
    parser.add_argument("email", help="Email of an existing profile")
    parser.add_argument("role", choices=list(PROFILE_ROLES))
    state = parser.add_mutually_exclusive_group()
    state.add_argument("--activate", dest="is_active", action="store_const", const=True)
    state.add_argument("--deactivate", dest="is_active", action="store_const", const=False)
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email:
        print("Email must be non-empty.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        profile = set_role(db, email, args.role, args.is_active)
        if profile is None:
            print(f"No profile with email '{email}'. The user must sign up first.", file=sys.stderr)
            return 1
        logger.info("Role set: email=%s role=%s active=%s", email, profile.role, profile.is_active)
        print(f"Profile '{email}' now has role '{profile.role}' (active={profile.is_active}).")
        return 0
    except Exception as e:
        db.rollback()
        logger.exception("set_role failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
