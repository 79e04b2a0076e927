from fastapi import APIRouter, Depends
from pydantic import BaseModel

from billflow.store import Store, get_store
from .service import authenticate, verify_token

router = APIRouter(prefix="/auth", tags=["authentication"])

# ============================
# MODELS
# ============================

class LoginRequest(BaseModel):
    username: str
    password: str

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: str


# ============================
# LOGIN
# ============================

@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, store: Store = Depends(get_store)):
    access_token = await authenticate(store, credentials.username, credentials.password)
    return LoginResponse(access_token=access_token, username=credentials.username)


# ============================
# AUTHENTICATED USER INFO
# ============================

@router.get("/me")
def get_current_user(user: dict = Depends(verify_token)):
    return {
        "username": user.get("sub"),
        "role": user.get("role")
    }
