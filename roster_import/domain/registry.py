"""Read-only registry of known staff identities."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from sqlalchemy.orm import Session

from .repositories import StaffRepository

RESERVE_MARKER = "(R)"
_RESERVE_SUFFIX = re.compile(r"\s*\(R\)$")


def normalize_name(text: str) -> str:
    return text.strip().upper()


def split_reserve(name: str) -> Tuple[str, bool]:
    """Split an upper-cased name into (base name, has (R) marker)."""
    base = _RESERVE_SUFFIX.sub("", name).strip()
    return base, base != name.strip()


class StaffRegistry:
    """
    Lookup of canonical staff names.

    Base names and their ``(R)`` designations are kept as distinct identities;
    the registry never maps one onto the other.
    """

    def __init__(self, names: Iterable[str]):
        self._canonical: Dict[str, str] = {}
        self._by_base: Dict[Tuple[str, bool], str] = {}
        for name in names:
            if not name or not name.strip():
                continue
            key = normalize_name(name)
            if key in self._canonical:
                continue
            self._canonical[key] = name.strip()
            self._by_base.setdefault(split_reserve(key), name.strip())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._canonical

    def __iter__(self) -> Iterator[str]:
        return iter(self._canonical.values())

    def __len__(self) -> int:
        return len(self._canonical)

    @property
    def names(self) -> List[str]:
        return list(self._canonical.values())

    def lookup(self, normalized: str) -> Optional[str]:
        """Exact lookup by normalized (trimmed, upper-case) name."""
        return self._canonical.get(normalized)

    def lookup_base(self, base: str, reserve: bool) -> Optional[str]:
        """Find the registry form of ``base`` with exactly the given (R)-ness."""
        return self._by_base.get((base, reserve))

    def with_reserve_variants(self) -> "StaffRegistry":
        """Return a registry that also holds NAME(R) for every base NAME."""
        names = self.names
        for name in self.names:
            base, reserve = split_reserve(normalize_name(name))
            if not reserve and (base, True) not in self._by_base:
                names.append(f"{name.strip()}{RESERVE_MARKER}")
        return StaffRegistry(names)

    @classmethod
    def from_session(cls, session: Session, generate_reserve_variants: bool = False) -> "StaffRegistry":
        """Build a registry from active rows of the staff_members table."""
        registry = cls(StaffRepository.get_active_names(session))
        return registry.with_reserve_variants() if generate_reserve_variants else registry

    def __repr__(self) -> str:
        return f"<StaffRegistry(size={len(self)})>"
