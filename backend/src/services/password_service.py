"""
Password hashing for patient credentials.

Uses bcrypt directly. Passwords are short (at most 8 characters), well
inside bcrypt's 72-byte input limit, so no pre-hashing is needed.
"""

import bcrypt


class PasswordService:
    """Service for hashing and verifying passwords."""

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a plaintext password with a fresh salt.

        Raises:
            ValueError: If the password is empty
        """
        if not password:
            raise ValueError("Password must not be empty")
        hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
        return hashed.decode('utf-8')

    @classmethod
    def verify_password(cls, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored digest."""
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
        except ValueError:
            # Stored value is not a bcrypt digest
            return False


# Global instance
password_service = PasswordService()
