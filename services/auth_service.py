import logging
import re

from werkzeug.security import check_password_hash, generate_password_hash

from config import ADMIN_ROLE, MIN_PASSWORD_LENGTH
from utils.errors import AuthenticationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def is_valid_email(email):
    return isinstance(email, str) and EMAIL_PATTERN.match(email.strip()) is not None


class AuthService:
    """Admin registration and credential checks"""

    def __init__(self, backend):
        self.backend = backend

    def register(self, email, password, confirm_password, name, phone=''):
        """
        Create a new admin account.

        Raises:
            ValidationError: If the form does not pass validation or the email is taken
        """
        if password != confirm_password:
            raise ValidationError("Password and confirmation do not match", code='password-mismatch')
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters", code='weak-password'
            )
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Name must not be empty", code='name-required')
        if not is_valid_email(email):
            raise ValidationError("Invalid email format", code='invalid-email')
        if phone is not None and not isinstance(phone, str):
            raise ValidationError("Phone number must be text", code='invalid-phone')
        if self.backend.admins.find_by_email(email):
            raise ValidationError("Email is already registered", code='email-already-in-use')

        admin = self.backend.admins.add(
            email=email.strip(),
            name=name.strip(),
            no_phone=(phone or '').strip(),
            role=ADMIN_ROLE,
            password_hash=generate_password_hash(password)
        )
        logger.info(f"Registered admin {admin.uid} ({admin.email})")
        return admin.to_dict()

    def login(self, email, password):
        """
        Check admin credentials and return the admin profile.

        Raises:
            AuthenticationError: With code invalid-email, user-not-found, wrong-password or not-admin
        """
        if not is_valid_email(email):
            raise AuthenticationError("Invalid email format", code='invalid-email')

        admin = self.backend.admins.find_by_email(email)
        if admin is None:
            logger.warning(f"Login attempt for unknown email {email}")
            raise AuthenticationError("Email is not registered", code='user-not-found')
        if not isinstance(password, str) or not check_password_hash(admin.password_hash, password):
            logger.warning(f"Wrong password for {email}")
            raise AuthenticationError("Wrong password", code='wrong-password')
        if admin.role != ADMIN_ROLE:
            logger.warning(f"{email} signed in without the admin role")
            raise AuthenticationError("You are not registered as an admin", code='not-admin')

        logger.info(f"Admin {admin.uid} logged in")
        return admin.to_dict()

    def get_admin(self, uid):
        """The admin for a session uid, or None if it no longer exists or lost the admin role"""
        admin = self.backend.admins.get(uid) if uid else None
        if admin is None or admin.role != ADMIN_ROLE:
            return None
        return admin


class ProfileService:
    """The signed-in admin's own profile"""

    def __init__(self, backend):
        self.backend = backend

    def get_profile(self, uid):
        return self._require(uid).to_dict()

    def update_profile(self, uid, name=None, email=None, no_phone=None):
        admin = self._require(uid)
        changes = {}

        if name is not None:
            if not isinstance(name, str) or not name.strip():
                raise ValidationError("Name must not be empty", code='name-required')
            changes['name'] = name.strip()
        if email is not None:
            if not is_valid_email(email):
                raise ValidationError("Invalid email format", code='invalid-email')
            other = self.backend.admins.find_by_email(email)
            if other is not None and other.uid != admin.uid:
                raise ValidationError("Email is already registered", code='email-already-in-use')
            changes['email'] = email.strip()
        if no_phone is not None:
            if not isinstance(no_phone, str):
                raise ValidationError("Phone number must be text", code='invalid-phone')
            changes['no_phone'] = no_phone.strip()

        if changes:
            self.backend.admins.update(admin, **changes)
            logger.info(f"Updated profile of admin {uid}: {sorted(changes)}")
        return admin.to_dict()

    def _require(self, uid):
        admin = self.backend.admins.get(uid)
        if admin is None:
            raise NotFoundError(f"Admin {uid} not found")
        return admin
