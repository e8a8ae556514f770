from sneakers.domain.entities.sneaker import Sneaker


class AuthorizationGuard:
    """
    Decides whether a caller may mutate a sneaker.

    Stateless and free of I/O. The caller identity is already authenticated
    upstream.
    """

    def is_owner(self, caller_id: str, sneaker: Sneaker) -> bool:
        """Return True if caller_id is the identity that owns the sneaker."""
        return bool(caller_id) and caller_id == sneaker.owner_id
