"""Session registry: connection id -> display name.

Display names are neither unique nor validated. Insertion order of the
underlying dict is the participant-list order; rebinding a connection keeps
its original position.
"""
from __future__ import annotations
from typing import Dict, List, Optional


class SessionRegistry:
    def __init__(self) -> None:
        self._names: Dict[str, str] = {}

    def bind(self, connection_id: str, username: str) -> None:
        self._names[connection_id] = username

    def unbind(self, connection_id: str) -> Optional[str]:
        """Remove a binding and return the name it held (None when unbound)."""
        return self._names.pop(connection_id, None)

    def get(self, connection_id: str) -> Optional[str]:
        return self._names.get(connection_id)

    def usernames(self) -> List[str]:
        return list(self._names.values())

    def __len__(self) -> int:
        return len(self._names)
