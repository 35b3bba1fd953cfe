"""Mapping of logical object keys to physical bucket paths."""


class KeyResolver:
    """Prepends the configured root prefix to object keys."""

    def __init__(self, root: str | None = None):
        self._root = root

    @property
    def root(self) -> str | None:
        return self._root

    def resolve(self, key: str) -> str:
        """
        Resolves a logical key to its physical path in the bucket.

        Root and key are joined with exactly one "/" between them, so a key
        with leading slashes still lands under the root.

        Args:
            key: The caller-owned object key.

        Returns:
            The key joined under the root prefix, or the key itself when no
            root prefix is configured.
        """
        if not self._root:
            return key
        return f"{self._root.rstrip('/')}/{key.lstrip('/')}"
