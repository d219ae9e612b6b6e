# dependencies.py
"""
Auth dependencies shared by the routers.

Tokens are issued by the auth service; this module only verifies them and
turns the payload into a CurrentUser.
"""
from fastapi import Depends, HTTPException, Request
from jose import JWTError, jwt

import config
from models import UserRole
from services.access import CurrentUser


# Token Auth Dependency
def verify_token(request: Request):
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
          return payload
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")


def get_current_user(token: dict = Depends(verify_token)) -> CurrentUser:
     user_id = token.get("id")
     try:
          role = UserRole(str(token.get("role", "")).upper())
     except ValueError:
          raise HTTPException(status_code=403, detail="Unknown role")
     if not user_id:
          raise HTTPException(status_code=403, detail="Invalid token")
     return CurrentUser(id=int(user_id), role=role)


def require_landlord(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
     if not user.is_landlord:
          raise HTTPException(status_code=403, detail="Only landlords can perform this action")
     return user
