from fastapi import Depends, HTTPException, status, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth
from typing import Optional
from sqlalchemy.orm import Session
from lvlup.database import get_db
from lvlup import crud, schemas

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(HTTPBearer(auto_error=False)),
    x_user_id: Optional[str] = Header(None, alias="X-User-ID"),
    db: Session = Depends(get_db)
) -> schemas.CurrentUser:
    """
    Verify Firebase ID token and get essential user information.
    Falls back to X-User-ID header if bearer token is not provided.

    Args:
        credentials: The HTTP Authorization credentials.
        x_user_id: Optional X-User-ID header value.
        db: The database session.

    Returns:
        CurrentUser: Simplified user object with id, email, display_name, username and timezone

    Raises:
        HTTPException: If both token and X-User-ID are invalid or missing
    """
    if credentials is None and x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Either Bearer authentication or X-User-ID header is required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        if credentials:
            try:
                decoded_token = auth.verify_id_token(credentials.credentials)

                user_id = decoded_token.get("uid")
                email = decoded_token.get("email")
                display_name = decoded_token.get("name")

                db_user = crud.get_user(db, user_id)

                if db_user:
                    if display_name and display_name != db_user.display_name:
                        db_user = crud.update_user_display_name(db, user_id, display_name)
                else:
                    # First sign-in creates the profile row
                    db_user = crud.create_user(db, user_id, email, display_name)

            except Exception as firebase_error:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail=f"Invalid token: {str(firebase_error)}",
                    headers={"WWW-Authenticate": "Bearer"},
                )
        else:
            user_id = x_user_id
            db_user = crud.get_user(db, user_id)
            if not db_user:
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid X-User-ID",
                )

        return schemas.CurrentUser(
            id=db_user.id,
            email=db_user.email,
            display_name=db_user.display_name,
            username=db_user.username,
            timezone=db_user.timezone,
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid authentication credentials: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )
