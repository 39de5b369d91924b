"""Offline adapters - used when no backend is configured."""

from evermind.ports.identity import User


class AnonymousIdentity:
    """Implements IdentityProvider. Nobody is ever signed in."""

    def current_user(self) -> User | None:
        return None


class NullRemoteStore:
    """Implements RemoteStore. Holds nothing and accepts every save."""

    def load(self, user_id: str) -> dict | None:
        return None

    def save(self, user_id: str, document: dict) -> None:
        pass
