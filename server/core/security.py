# server/core/security.py

import logging
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from core.errors import ValidationError


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# -------------------------------
# Password Hashing
# -------------------------------

def get_password_hash(password: str) -> str:
    try:
        return pwd_context.hash(password)
    except ValueError:
        # bcrypt refuses NUL bytes.
        raise ValidationError("Password contains unsupported characters.")


def verify_password_hash(plain_password, hashed_password: str) -> bool:
    if not isinstance(plain_password, str) or not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Corrupt stored hash, or a candidate bcrypt cannot take (NUL bytes).
        logger.warning("Password comparison failed")
        return False


# -------------------------------
# Bearer Tokens
# -------------------------------

@dataclass(frozen=True)
class TokenClaims:
    id: int
    username: str
    iat: int
    exp: int

    def to_dict(self) -> dict:
        return asdict(self)


class TokenService:
    """
    Issues and checks the signed, time-limited bearer tokens handed out by /login.

    The only state is the signing secret, fixed when the service is built.
    verify() never raises: anything it cannot accept comes back as None.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = ALGORITHM,
        expires_in: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    ):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user_id: int, username: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "id": user_id,
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_in).timestamp()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token) -> TokenClaims | None:
        if not isinstance(token, str) or not token:
            return None

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except (JWTError, TypeError, ValueError) as e:
            # jose int()-casts iat/exp before its own checks, so a signed
            # token with a null or list claim surfaces as TypeError.
            logger.debug("Rejected token: %s", e)
            return None

        user_id = payload.get("id")
        username = payload.get("username")
        iat = payload.get("iat")
        exp = payload.get("exp")

        if not isinstance(user_id, int) or isinstance(user_id, bool):
            logger.debug("Rejected token without a usable id claim")
            return None
        if not isinstance(username, str) or not username:
            logger.debug("Rejected token without a usable username claim")
            return None
        if not isinstance(iat, (int, float)) or not isinstance(exp, (int, float)):
            logger.debug("Rejected token without iat/exp claims")
            return None

        return TokenClaims(id=user_id, username=username, iat=int(iat), exp=int(exp))
