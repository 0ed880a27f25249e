"""Core records: TV series and the users who watch them."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Sequence

GENRES: tuple[str, ...] = ("Action", "Comedy", "Drama", "Animation", "Crime")


class SeriesNotWatchedError(LookupError):
    """Raised when a series is not among a user's watched series."""


@dataclass(eq=False)
class TVSeries:
    """A TV series. Two series are the same only if they are the same object."""

    title: str
    seasons: int
    episodes_per_season: list[int] = field(default_factory=list)
    genre: str = ""
    rating: float = 0.0
    finished: bool = False

    def total_episodes(self) -> int:
        """Number of episodes across all seasons."""
        return sum(self.episodes_per_season)

    def describe(self) -> str:
        """Human-readable summary of the series."""
        lines = [
            "Displaying TV series info:",
            f"-----Title: {self.title}",
            f"-----Number of Seasons: {self.seasons}",
            "-----Episodes per Season:",
        ]
        lines.extend(
            f"-----Season {number}: {count} episodes"
            for number, count in enumerate(self.episodes_per_season, start=1)
        )
        lines.extend(
            [
                f"-----Genre: {self.genre}",
                f"-----Rating: {self.rating:g}",
                f"-----Finished: {'Yes' if self.finished else 'No'}",
            ]
        )
        return "\n".join(lines) + "\n"

    def update_rating(self, users: Sequence[User]) -> float:
        """Set the rating to the average given by the users who watched this series.

        Returns the new rating, or 0 (leaving the rating untouched) when none
        of the users has watched it. Raises ValueError if no users are given.
        """
        if not users:
            raise ValueError("no users provided")
        scores = [user.watched[self].rating for user in users if self in user.watched]
        if not scores:
            return 0
        self.rating = sum(scores) / len(scores)
        return self.rating

    def __lt__(self, other: TVSeries) -> bool:
        return self.rating < other.rating


@dataclass
class Viewing:
    """Progress and rating a user has for one watched series."""

    episodes: int = 0
    rating: int = 0


@dataclass(eq=False)
class User:
    """A registered user with watch history and a wish queue."""

    username: str
    name: str = "Unknown"
    country: str = "Unknown"
    favorite_genres: list[str] = field(default_factory=list)
    watched: dict[TVSeries, Viewing] = field(default_factory=dict)
    wish_series: deque[TVSeries] = field(default_factory=deque)

    def add_favorite_genre(self, genre_index: int) -> bool:
        """Add the genre at ``genre_index`` of GENRES; False if already a favourite."""
        if not 0 <= genre_index < len(GENRES):
            raise ValueError(f"invalid genre index: {genre_index}")
        genre = GENRES[genre_index]
        if genre in self.favorite_genres:
            return False
        self.favorite_genres.append(genre)
        return True

    def add_watched_series(self, series: TVSeries) -> bool:
        """Start tracking a series; False if it is already tracked."""
        _require(series)
        if series in self.watched:
            return False
        self.watched[series] = Viewing()
        return True

    def add_wish_series(self, series: TVSeries) -> None:
        """Append a series to the wish queue; duplicates are rejected."""
        _require(series)
        if series in self.wish_series:
            raise ValueError(f"series already wished: {series.title}")
        self.wish_series.append(series)

    def add_episodes_watched(self, series: TVSeries, n: int) -> int:
        """Set episodes watched to ``n`` (capped at the total), or add one if ``n`` <= 0.

        Returns the updated count.
        """
        viewing = self._viewing(series)
        total = series.total_episodes()
        if n > 0:
            viewing.episodes = min(total, n)
        elif viewing.episodes < total:
            viewing.episodes += 1
        return viewing.episodes

    def add_rating(self, series: TVSeries, rating: float) -> None:
        """Record an integer rating for a watched series (fractions are dropped)."""
        self._viewing(series).rating = int(rating)

    def rating_for(self, series: TVSeries) -> int:
        """Rating given to a watched series."""
        return self._viewing(series).rating

    def episodes_for(self, series: TVSeries) -> int:
        """Episodes watched of a watched series."""
        return self._viewing(series).episodes

    def remove_watched_series(self, title: str) -> bool:
        """Drop every watched series with this title; True if any was removed."""
        doomed = [series for series in self.watched if series.title == title]
        for series in doomed:
            del self.watched[series]
        return bool(doomed)

    def episodes_before(self, title: str, catalog: Iterable[TVSeries]) -> int:
        """Episodes to watch in the wish queue before reaching the series ``title``.

        Returns 0 when no wished series has that title. Raises ValueError if
        the title or the catalog is empty.
        """
        if not title or not list(catalog):
            raise ValueError("title and catalog must not be empty")
        total = 0
        for series in self.wish_series:
            if series.title == title:
                return total
            total += series.total_episodes()
        return 0

    def describe(self) -> str:
        """Human-readable summary of the user."""
        lines = [
            "Displaying user info:",
            f"-----Username: {self.username}",
            f"-----Name: {self.name}",
            f"-----Country: {self.country}",
            "-----Favorite Genres:",
        ]
        lines.extend(f"------ {genre}" for genre in self.favorite_genres)
        lines.append("-----Watched Series:")
        lines.extend(
            f"------ {series.title}, Episodes Watched: {viewing.episodes}"
            for series, viewing in self.watched.items()
        )
        return "\n".join(lines) + "\n"

    def _viewing(self, series: TVSeries) -> Viewing:
        _require(series)
        try:
            return self.watched[series]
        except KeyError:
            raise SeriesNotWatchedError(series.title) from None


def _require(series: TVSeries | None) -> None:
    if series is None:
        raise ValueError("series is required")