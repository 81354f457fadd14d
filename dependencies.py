import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token

from models.user import User
from services.firestore import FirestoreDB
from services.posts import PostService

logger = logging.getLogger(__name__)


def get_current_user(request: Request) -> User:
    """
    Verify Firebase ID token from Authorization header and return user info

    Plain def so FastAPI runs the revocation check in its threadpool.
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header"
        )

    token = authorization.split("Bearer ")[1]
    try:
        # Verify the Firebase ID token
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
        return User(
            user_id=decoded_token["uid"],
            email=decoded_token.get("email"),
        )
    except Exception as e:
        logger.warning("Invalid authentication token: %s", e)
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token"
        )


async def get_firestore(request: Request) -> FirestoreDB:
    """ Get Firestore DB from app state """
    return request.app.state.firestore


async def get_post_service(db: Annotated[FirestoreDB, Depends(get_firestore)]) -> PostService:
    """Build the post service over the app's store"""
    return PostService(db)


CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostService, Depends(get_post_service)]
