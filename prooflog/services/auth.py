"""Authentication service for session tokens and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from prooflog.config import Settings
from prooflog.models.account import Account
from prooflog.services.errors import Conflict, InvalidSession
from prooflog.services.identity import handle_of

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. A malformed hash never matches."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def issue_session(
    account_id: str, settings: Settings, issued_at: datetime | None = None
) -> str:
    """Create a signed session token for an account."""
    issued_at = issued_at or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.session_expiration_minutes)
    to_encode = {
        "sub": account_id,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_session(token: str, settings: Settings) -> str:
    """Return the account id carried by a session token.

    Raises:
        InvalidSession: bad signature, malformed token, missing subject or expired.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidSession() from e

    account_id = payload.get("sub")
    if not isinstance(account_id, str) or not account_id:
        raise InvalidSession()
    return account_id


def get_account_by_email(db: Session, email: str) -> Account | None:
    """Get an account by email (case-insensitive)."""
    return db.query(Account).filter(Account.email == normalize_email(email)).first()


def get_account(db: Session, account_id: str) -> Account | None:
    return db.query(Account).filter(Account.id == account_id).first()


def authenticate_account(db: Session, email: str, password: str) -> Account | None:
    """Authenticate an account by email and password."""
    account = get_account_by_email(db, email)
    if not account:
        # Spend the same hashing effort as a real comparison
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, account.password_hash):
        return None
    return account


def register_account(db: Session, email: str, password: str) -> Account:
    """Create a new account with its public handle.

    The handle is the email local-part and must be unique across all domains, so
    a new email such as ``sak2@y.com`` is refused once ``sak2@x.com`` exists.

    Raises:
        Conflict: the email is already registered ("User already exists"), or
            the handle derived from it is already taken ("Handle already taken").
    """
    email = normalize_email(email)
    handle = handle_of(email)

    if get_account_by_email(db, email):
        raise Conflict("User already exists")
    if db.query(Account.id).filter(Account.handle == handle).first():
        raise Conflict("Handle already taken")

    account = Account(email=email, handle=handle, password_hash=get_password_hash(password))
    db.add(account)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        db.rollback()
        raise Conflict("User already exists") from e
    db.refresh(account)
    logger.info(f"Registered account {account.id} with handle '{handle}'")
    return account
