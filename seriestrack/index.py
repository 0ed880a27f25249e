"""Indexes over users: a search tree by username and a per-country hash table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .models import GENRES, TVSeries, User

DELETED_KEY = "apagado"
_MAX_PROBES = 10


def _upper(char: str) -> str:
    """Upper-case an ASCII letter; leave anything else alone."""
    return char.upper() if char.isascii() else char


def _initial(user: User) -> str:
    return _upper(user.username[:1])


@dataclass(eq=False)
class UserNode:
    """A node of the username search tree."""

    user: User
    left: UserNode | None = None
    right: UserNode | None = None


class UserTree:
    """Binary search tree of users ordered by username."""

    def __init__(self) -> None:
        self.root: UserNode | None = None

    def __iter__(self) -> Iterator[User]:
        return iter(self.inorder())

    def __len__(self) -> int:
        return len(self.inorder())

    def add_user(self, user: User) -> bool:
        """Insert a user; False if the username is already present."""
        if self.root is None:
            self.root = UserNode(user)
            return True
        node = self.root
        while True:
            if user.username < node.user.username:
                if node.left is None:
                    node.left = UserNode(user)
                    return True
                node = node.left
            elif user.username > node.user.username:
                if node.right is None:
                    node.right = UserNode(user)
                    return True
                node = node.right
            else:
                return False

    def remove(self, username: str) -> bool:
        """Remove the user with this username; False if there is none."""
        self.root, removed = self._delete(self.root, username)
        return removed

    @classmethod
    def _delete(cls, node: UserNode | None, username: str) -> tuple[UserNode | None, bool]:
        if node is None:
            return None, False
        if username < node.user.username:
            node.left, removed = cls._delete(node.left, username)
            return node, removed
        if username > node.user.username:
            node.right, removed = cls._delete(node.right, username)
            return node, removed
        if node.left is None:
            return node.right, True
        if node.right is None:
            return node.left, True
        successor = node.right
        while successor.left is not None:
            successor = successor.left
        node.user = successor.user
        node.right, _ = cls._delete(node.right, successor.user.username)
        return node, True

    def inorder(self) -> list[User]:
        """Users in ascending username order."""
        result: list[User] = []
        stack: list[UserNode] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.user)
            node = node.right
        return result

    def users_with_initial(self, letter: str) -> list[User]:
        """Users whose username starts with ``letter``, case-insensitively.

        Each node is listed before the matches of its left and then right subtree.
        """
        if len(letter) != 1:
            raise ValueError("letter must be a single character")
        return self._with_initial(self.root, _upper(letter))

    @classmethod
    def _with_initial(cls, node: UserNode | None, letter: str) -> list[User]:
        if node is None:
            return []
        initial = _initial(node.user)
        left = cls._with_initial(node.left, letter) if initial >= letter else []
        right = cls._with_initial(node.right, letter) if initial <= letter else []
        own = [node.user] if initial == letter else []
        return own + left + right

    def users_not_fan(self) -> list[User]:
        """Users with more than two watched series they have not finished.

        Each node is listed before the matches of its left and then right subtree.
        """
        return self._not_fan(self.root)

    @classmethod
    def _not_fan(cls, node: UserNode | None) -> list[User]:
        if node is None:
            return []
        left = cls._not_fan(node.left)
        right = cls._not_fan(node.right)
        unfinished = sum(
            1
            for series, viewing in node.user.watched.items()
            if series.total_episodes() > viewing.episodes
        )
        own = [node.user] if unfinished > 2 else []
        return own + left + right

    def category_statistics(self, genre: str, percent: int) -> list[int]:
        """Counts of users for a genre.

        The three counts are: users who watched at least one episode of a
        series of the genre; those who also watched at least ``percent`` of
        its episodes; and of those, the ones with the genre as a favourite.
        Raises ValueError for an empty genre or a percent outside 0..100.
        """
        if not genre or not 0 <= percent <= 100:
            raise ValueError("genre must not be empty and percent must be within 0..100")
        counts = [0, 0, 0]
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            for index, flag in enumerate(self._user_flags(node.user, genre, percent)):
                counts[index] += flag
            stack.extend(child for child in (node.left, node.right) if child is not None)
        return counts

    @staticmethod
    def _user_flags(user: User, genre: str, percent: int) -> tuple[int, int, int]:
        started = reached = favourite = 0
        for series, viewing in user.watched.items():
            if series.genre != genre or viewing.episodes < 1:
                continue
            started = 1
            if viewing.episodes * 100 // series.total_episodes() >= percent:
                reached = 1
                if genre in user.favorite_genres:
                    favourite = 1
        return started, reached, favourite


@dataclass
class CountryStats:
    """Viewing statistics for one country."""

    country: str
    n_users: int = 0
    n_series: int = 0
    average_series: float = 0.0
    n_genre: list[int] = field(default_factory=lambda: [0] * len(GENRES))

    @property
    def is_deleted(self) -> bool:
        return self.country == DELETED_KEY


def _deleted_marker() -> CountryStats:
    return CountryStats(DELETED_KEY, 0, 0, 0.0, [0] * len(GENRES))


def _signed(byte: int) -> int:
    return byte - 256 if byte > 127 else byte


def _genre_counts(series: Iterable[TVSeries]) -> list[int]:
    counts = [0] * len(GENRES)
    for item in series:
        if item.genre in GENRES:
            counts[GENRES.index(item.genre)] += 1
    return counts


class HashTable:
    """Open-addressing hash table of CountryStats keyed by country, with quadratic probing."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("table size must be positive")
        self.size = size
        self.table: list[CountryStats | None] = [None] * size
        self.count = 0

    def __len__(self) -> int:
        return self.count

    def hash_key(self, key: str) -> int:
        """Slot of ``key``: 7 plus the sum of its (signed UTF-8) bytes, modulo the size."""
        if not key:
            raise ValueError("key must not be empty")
        return (7 + sum(_signed(byte) for byte in key.encode("utf-8"))) % self.size

    def probe(self, key: str, i: int) -> int:
        """Slot for collision degree ``i``: hash + 23 * i**2, modulo the size."""
        return (self.hash_key(key) + 23 * i * i) % self.size

    def insert(self, stats: CountryStats) -> int:
        """Store ``stats`` and return its slot.

        Up to ten probe positions are tried for a free slot; failing that, a
        slot left by a deleted entry along the probe sequence is reused.
        Raises ValueError for an empty or already present country and
        OverflowError when no slot can be found.
        """
        key = stats.country
        if not key:
            raise ValueError("country must not be empty")
        if self.search(key) is not None:
            raise ValueError(f"country already present: {key}")
        slot = next(
            (index for index in (self.probe(key, i) for i in range(_MAX_PROBES))
             if self.table[index] is None),
            None,
        )
        if slot is None:
            slot = next(
                (index for index in (self.probe(key, i) for i in range(self.size))
                 if self.table[index] is not None and self.table[index].is_deleted),
                None,
            )
        if slot is None:
            raise OverflowError(f"no free slot for {key}")
        self.table[slot] = stats
        self.count += 1
        return slot

    def search(self, country: str) -> int | None:
        """Slot holding ``country``, or None if it is not stored."""
        if not country:
            raise ValueError("country must not be empty")
        for i in range(self.size):
            index = self.probe(country, i)
            slot = self.table[index]
            if slot is None:
                return None
            if slot.country == country and not slot.is_deleted:
                return index
        return None

    def delete(self, country: str) -> None:
        """Remove ``country``, leaving a deleted marker. Raises KeyError if absent."""
        index = self.search(country)
        if index is None:
            raise KeyError(country)
        self.table[index] = _deleted_marker()
        self.count -= 1

    def import_users(self, users: Iterable[User | None]) -> None:
        """Build or update the per-country statistics from the users' watch histories."""
        seen: dict[str, dict[TVSeries, None]] = {}
        for user in users:
            if user is None:
                raise ValueError("user is required")
            watched = list(user.watched)
            index = self.search(user.country)
            if index is None:
                stats = CountryStats(
                    user.country, 1, len(watched), float(len(watched)), _genre_counts(watched)
                )
                self.insert(stats)
                seen[user.country] = dict.fromkeys(watched)
                continue
            stats = self.table[index]
            distinct = seen.setdefault(user.country, {})
            distinct.update(dict.fromkeys(watched))
            stats.n_users += 1
            stats.n_series = len(distinct)
            stats.average_series = (
                stats.average_series * (stats.n_users - 1) + len(watched)
            ) / stats.n_users
            stats.n_genre = _genre_counts(distinct)

    def show(self) -> str:
        """One line per slot describing its contents."""
        lines = []
        for index, stats in enumerate(self.table):
            if stats is None:
                lines.append(str(index))
                continue
            genres = "".join(
                f"-{genre}({count})" for genre, count in zip(GENRES, stats.n_genre)
            )
            lines.append(
                f"{index}->{stats.country}-{stats.n_users}-{stats.n_series}"
                f"-{stats.average_series:g}{genres}"
            )
        return "\n".join(lines) + "\n"