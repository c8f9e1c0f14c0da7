"""
Password hashing (bcrypt)
"""
import bcrypt


def hash_password(password: str) -> str:
    """Create a bcrypt hash of the password"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
