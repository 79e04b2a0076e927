from .service import verify_token, create_access_token, verify_password, get_password_hash

__all__ = ['verify_token', 'create_access_token', 'verify_password', 'get_password_hash']
