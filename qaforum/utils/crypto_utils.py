import base64
import hashlib

import bcrypt

from qaforum.config.settings import settings


def _prehash(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_prehash(password), salt).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(password), hashed.encode())
    except ValueError:
        # stored value is not a bcrypt hash
        return False
