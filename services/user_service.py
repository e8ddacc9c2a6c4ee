import logging

from models.user import USER_BLOCKED
from utils.errors import NotFoundError

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, backend):
        self.backend = backend

    def list_users(self):
        return [user.to_dict() for user in self.backend.users.find_all(order_by='created_at')]

    def block_user(self, user_id):
        """Block an end-user account. Blocking an already blocked account changes nothing."""
        user = self.backend.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        if user.is_blocked:
            logger.info(f"User {user_id} is already blocked")
            return user.to_dict()

        self.backend.users.update(user, status=USER_BLOCKED)
        logger.info(f"Blocked user {user_id}")
        return user.to_dict()
