"""Firebase Authentication dependencies.

Every workout route depends on `require_login`, which resolves the caller's
identity once per request and hands it to the route explicitly.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from firebase_admin import auth
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import get_db
from firebase_config import get_firebase_auth
from models import UserDB

logger = logging.getLogger(__name__)


class FirebaseUser(BaseModel):
    """A user verified from a Firebase ID token."""

    uid: str  # Firebase UID
    email: Optional[str] = None
    email_verified: bool = False
    claims: dict = {}


class AuthenticatedUser(BaseModel):
    """A verified user together with their local database record.

    This is the identity passed to every workout operation; ownership checks
    compare workout owners against `user_id`.
    """

    firebase_uid: str
    user_id: UUID  # Local database user ID
    email: str
    firebase_user: FirebaseUser


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_token_from_request(request: Request) -> Optional[str]:
    """Extract Bearer token from Authorization header.

    Returns:
        Token string or None if not present
    """
    auth_header = request.headers.get("Authorization", "")

    if not auth_header.startswith("Bearer "):
        return None

    return auth_header[7:]  # Remove "Bearer " prefix


async def verify_firebase_token(
    request: Request,
    auth_instance: auth = Depends(get_firebase_auth),
) -> FirebaseUser:
    """Verify the request's Firebase ID token.

    Raises:
        HTTPException: 401 if token is invalid/missing
    """
    token = extract_token_from_request(request)

    if not token:
        raise unauthorized("Missing authentication token")

    try:
        decoded_token = auth_instance.verify_id_token(token)
    except auth.ExpiredIdTokenError as err:
        raise unauthorized("Authentication token has expired") from err
    except auth.InvalidIdTokenError as err:
        raise unauthorized("Invalid authentication token") from err
    except Exception as e:
        logger.warning("Firebase token verification failed: %s", e)
        raise unauthorized(f"Authentication failed: {str(e)}") from e

    return FirebaseUser(
        uid=decoded_token["uid"],
        email=decoded_token.get("email"),
        email_verified=decoded_token.get("email_verified", False),
        claims=decoded_token,
    )


async def require_login(
    firebase_user: FirebaseUser = Depends(verify_firebase_token),
    db: Session = Depends(get_db),
) -> AuthenticatedUser:
    """Resolve the current user, creating their local record on first login.

    Use this as the guard for every endpoint that acts on a user's data.

    Raises:
        HTTPException: 401 if authentication fails
        HTTPException: 500 if user creation fails

    Example:
        @router.get("")
        def list_things(user: AuthenticatedUser = Depends(require_login)):
            ...
    """
    if not firebase_user.email:
        raise unauthorized("User email is required")

    user = db.query(UserDB).filter(UserDB.firebase_uid == firebase_user.uid).first()

    if not user:
        try:
            user = UserDB(
                firebase_uid=firebase_user.uid,
                email=firebase_user.email,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
        except Exception as e:
            db.rollback()
            logger.exception("Failed to create user %s", firebase_user.uid)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to create user: {str(e)}",
            ) from e
        logger.info("Created user %s for %s", user.id, user.email)

    return AuthenticatedUser(
        firebase_uid=firebase_user.uid,
        user_id=user.id,
        email=user.email,
        firebase_user=firebase_user,
    )
