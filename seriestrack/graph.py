"""Follower network between users."""

from __future__ import annotations

from collections import deque
from typing import Iterator

from .models import TVSeries, User


def _require(user: User | None) -> User:
    if user is None:
        raise ValueError("user is required")
    return user


class FollowGraph:
    """Directed graph in which an edge from A to B means that A follows B.

    Users are nodes kept in the order they were added; identity decides
    whether two users are the same node.
    """

    def __init__(self) -> None:
        self.network: dict[User, list[User]] = {}

    def __len__(self) -> int:
        return len(self.network)

    def __iter__(self) -> Iterator[User]:
        return iter(self.network)

    def __contains__(self, user: object) -> bool:
        return user in self.network

    @property
    def users(self) -> list[User]:
        """Nodes in insertion order."""
        return list(self.network)

    def following(self, user: User) -> list[User]:
        """Users followed by ``user``, in the order the edges were added."""
        return list(self._edges(user))

    def add_user(self, user: User) -> bool:
        """Add a node; False if the user is already in the graph."""
        _require(user)
        if user in self.network:
            return False
        self.network[user] = []
        return True

    def position(self, user: User) -> int | None:
        """Index of the user among the nodes, or None if it is not a node."""
        _require(user)
        for index, node in enumerate(self.network):
            if node is user:
                return index
        return None

    def add_follower(self, follower: User, followed: User) -> bool:
        """Make ``follower`` follow ``followed``, adding either as a node if needed.

        Returns False if the edge already exists.
        """
        _require(follower)
        _require(followed)
        self.add_user(follower)
        self.add_user(followed)
        edges = self.network[follower]
        if followed in edges:
            return False
        edges.append(followed)
        return True

    def remove_follower(self, follower: User, followed: User) -> bool:
        """Stop ``follower`` following ``followed``; False if it did not.

        Raises KeyError if either user is not in the graph.
        """
        _require(follower)
        _require(followed)
        if followed not in self.network:
            raise KeyError(followed.username)
        edges = self._edges(follower)
        if followed not in edges:
            return False
        edges.remove(followed)
        return True

    def most_following(self) -> list[User]:
        """Users who follow the most others, in node order (ties are all kept)."""
        if not self.network:
            return []
        record = max(len(edges) for edges in self.network.values())
        return [user for user, edges in self.network.items() if len(edges) == record]

    def following_most_watched_series(self, user: User) -> TVSeries | None:
        """Series most watched by the users that ``user`` follows.

        Ranked by total episodes watched, then by number of watchers, then by
        the alphabetically first title. None when the followed users have
        watched nothing. Raises KeyError if the user is not in the graph.
        """
        followed = self._edges(user)
        episodes: dict[TVSeries, int] = {}
        watchers: dict[TVSeries, int] = {}
        for other in followed:
            for series, viewing in other.watched.items():
                episodes[series] = episodes.get(series, 0) + viewing.episodes
                watchers[series] = watchers.get(series, 0) + 1
        if not episodes:
            return None
        return min(
            episodes,
            key=lambda series: (-episodes[series], -watchers[series], series.title),
        )

    def shortest_path(self, source: User, target: User) -> int | None:
        """Number of follow steps from ``source`` to ``target``, or None if unreachable.

        Raises KeyError if either user is not in the graph.
        """
        _require(source)
        _require(target)
        for user in (source, target):
            if user not in self.network:
                raise KeyError(user.username)
        distance = {source: 0}
        pending = deque([source])
        while pending:
            current = pending.popleft()
            if current is target:
                return distance[current]
            for neighbour in self.network[current]:
                if neighbour not in distance:
                    distance[neighbour] = distance[current] + 1
                    pending.append(neighbour)
        return None

    def describe(self) -> str:
        """One line per node listing the users it follows."""
        lines = [
            f"({index}) {user.username} -> "
            + " | ".join(other.username for other in edges)
            for index, (user, edges) in enumerate(self.network.items())
        ]
        return "\n".join(lines) + "\n\n"

    def _edges(self, user: User) -> list[User]:
        _require(user)
        try:
            return self.network[user]
        except KeyError:
            raise KeyError(user.username) from None