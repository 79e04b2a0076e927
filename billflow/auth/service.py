import logging
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Header
from jose import JWTError, ExpiredSignatureError, jwt
from passlib.context import CryptContext

from billflow.config import settings as env

logger = logging.getLogger(__name__)

# =========================
# JWT / SECURITY CONFIG
# =========================

ALGORITHM = "HS256"

# Password hashing setup
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


# =========================
# PASSWORD HELPERS
# =========================

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


# =========================
# TOKEN CREATION
# =========================

def create_access_token(data: dict, expires_minutes: int = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    minutes = expires_minutes or env.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, env.secret_key, algorithm=ALGORITHM)


# =========================
# TOKEN VERIFICATION (HEADER OR QUERY)
# =========================

def verify_token(
    authorization: str = Header(None),
    token: str = None
):
    """
    Verify JWT token from Authorization header (Bearer <token>)
    or from a 'token' query parameter.
    Returns the decoded payload if valid.
    """
    if authorization:
        try:
            scheme, token_value = authorization.split()
        except ValueError:
            raise HTTPException(
                status_code=401,
                detail="Invalid authorization header format"
            )
        if scheme.lower() != "bearer":
            raise HTTPException(
                status_code=401,
                detail="Invalid authorization scheme"
            )
        token = token_value
    elif not token:
        raise HTTPException(
            status_code=401,
            detail="Missing authorization token"
        )

    try:
        return jwt.decode(token, env.secret_key, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=401,
            detail="Token expired"
        )
    except JWTError:
        raise HTTPException(
            status_code=401,
            detail="Invalid token"
        )


# =========================
# LOGIN
# =========================

async def authenticate(store, username: str, password: str) -> str:
    """Check the admin credentials held in settings and issue a token."""
    current = await store.settings.get()
    security = current.security

    if username != security.username or not verify_password(password, security.password_hash):
        logger.warning(f"Failed login for {username}")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    logger.info(f"User {username} logged in")
    return create_access_token({"sub": username, "role": "admin"})
