"""Sales account management (admin only).

Accounts live in the users table with role "Sales" and ids of the form
sales_<n>. Credentials are managed by the external auth service.
"""

from __future__ import annotations

import logging
import re

from scorify.db import repo
from scorify.db.repo import DbSession
from scorify.models.domain import UserEntity

logger = logging.getLogger(__name__)

SALES_ROLE = "Sales"
SALES_ID_PREFIX = "sales_"
_SALES_ID_PATTERN = re.compile(r"^sales_(\d+)$")


class DuplicateEmailError(ValueError):
    """Raised when an email is already used by another account."""


class SalesNotFoundError(ValueError):
    """Raised when a sales account does not exist."""


def next_sales_id(existing_ids: list[str]) -> str:
    """Next sales_<n> id after the highest numeric suffix in use."""
    highest = 0
    for user_id in existing_ids:
        match = _SALES_ID_PATTERN.match(user_id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{SALES_ID_PREFIX}{highest + 1}"


def list_sales(session: DbSession) -> list[UserEntity]:
    """All sales accounts ordered by name."""
    return repo.get_users_by_role(session, SALES_ROLE)


def create_sales(
    session: DbSession,
    name: str,
    email: str,
    requested_id: str | None = None,
) -> UserEntity:
    """Create a sales account.

    A requested id is honored when it has the sales_ prefix and is free;
    otherwise the next sequential id is generated.

    Raises:
        DuplicateEmailError: If the email is taken.
    """
    email = email.strip().lower()
    if repo.get_user_by_email(session, email) is not None:
        raise DuplicateEmailError(f"Email already in use: {email}")

    if (
        requested_id
        and requested_id.startswith(SALES_ID_PREFIX)
        and repo.get_user(session, requested_id) is None
    ):
        sales_id = requested_id
    else:
        sales_id = next_sales_id(repo.get_user_ids_by_role(session, SALES_ROLE))

    entity = repo.create_user(
        session,
        UserEntity(id=sales_id, name=name.strip(), email=email, role=SALES_ROLE),
    )
    repo.commit(session)
    logger.info(f"Sales account {sales_id} created")
    return entity


def _require_sales(session: DbSession, sales_id: str) -> UserEntity:
    user = repo.get_user(session, sales_id)
    if user is None or user.role != SALES_ROLE:
        raise SalesNotFoundError(f"Sales not found: {sales_id}")
    return user


def update_sales(
    session: DbSession,
    sales_id: str,
    *,
    name: str | None = None,
    email: str | None = None,
) -> None:
    """Partially update a sales account. Blank fields are ignored.

    Raises:
        SalesNotFoundError: If the account does not exist.
        DuplicateEmailError: If the new email belongs to another account.
    """
    _require_sales(session, sales_id)

    name = name.strip() if name and name.strip() else None
    email = email.strip().lower() if email and email.strip() else None

    if email is not None:
        owner = repo.get_user_by_email(session, email)
        if owner is not None and owner.id != sales_id:
            raise DuplicateEmailError(f"Email already in use: {email}")

    repo.update_user(session, sales_id, name=name, email=email)
    repo.commit(session)
    logger.info(f"Sales account {sales_id} updated")


def delete_sales(session: DbSession, sales_id: str) -> None:
    """Delete a sales account.

    Raises:
        SalesNotFoundError: If the account does not exist.
    """
    _require_sales(session, sales_id)
    repo.delete_user(session, sales_id)
    repo.commit(session)
    logger.info(f"Sales account {sales_id} deleted")
