"""Create an organisation with a platform admin user (Postgres only).

Usage:
    python -m scripts.create_organisation <name> <email> <admin_email> [password]
If password is omitted, a random one is printed. The trial membership is
created by the job worker (scripts.run_jobs).
"""

import asyncio
import secrets
import sys
from pathlib import Path

from dotenv import load_dotenv

from contentflow.application.use_cases.organisations import OrganisationService
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import ResourceAlreadyExistsException
from contentflow.infrastructure.persistence.database import dispose_engine, get_session_factory
from contentflow.infrastructure.persistence.repositories import (
    BackgroundJobRepository,
    FlowRepository,
    OrganisationRepository,
    UserRepository,
)


def _load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def main() -> None:
    """Create organisation and admin in one transaction."""
    _load_env()
    if len(sys.argv) < 4:
        print(
            "Usage: python -m scripts.create_organisation <name> <email> <admin_email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    name, email, admin_email = sys.argv[1:4]
    password = sys.argv[4] if len(sys.argv) > 4 else secrets.token_urlsafe(12)

    try:
        async with get_session_factory()() as session:
            async with session.begin():
                service = OrganisationService(
                    OrganisationRepository(session),
                    UserRepository(session),
                    BackgroundJobRepository(session),
                    FlowRepository(session),
                )
                result = await service.create_organisation(
                    name=name,
                    email=email,
                    admin_name="Admin",
                    admin_email=admin_email,
                    admin_password=password,
                    admin_role=UserRole.ADMIN,
                )
    except ResourceAlreadyExistsException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()
    print(f"Created organisation: {result.organisation_id} ({result.organisation_name})")
    print(f"Admin: {result.admin_user_id} ({result.admin_email})")
    print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
