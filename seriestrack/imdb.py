"""Queries over a database of series, their episodes and credited principals."""

from __future__ import annotations

from collections import Counter, defaultdict
from pathlib import Path
from typing import Iterable, Iterator

from .imdb_io import read_title_basics, read_title_episodes, read_title_principals
from .imdb_records import TitleBasics, TitleEpisode, TitlePrincipals


def _character_name(text: str) -> str:
    """A character as written in a credit, without surrounding blanks or quotes."""
    return text.strip().strip('"')


class SeriesDatabase:
    """Series keyed by id, episodes grouped by series and credits grouped by episode."""

    def __init__(self) -> None:
        self.titles: dict[str, TitleBasics] = {}
        self.episodes: dict[str, list[TitleEpisode]] = defaultdict(list)
        self.principals: dict[str, list[TitlePrincipals]] = defaultdict(list)

    def add_title(self, title: TitleBasics) -> None:
        """Store a title, replacing any earlier one with the same id."""
        self.titles[title.tconst] = title

    def add_episode(self, episode: TitleEpisode) -> None:
        """Attach an episode to its parent series."""
        self.episodes[episode.parent_tconst].append(episode)

    def add_principal(self, principal: TitlePrincipals) -> None:
        """Attach a credit to its episode."""
        self.principals[principal.tconst].append(principal)

    def _episode_credits(self, series_id: str) -> Iterator[list[TitlePrincipals]]:
        """Credits of each episode of a series, one list per credited episode."""
        for episode in self.episodes.get(series_id, []):
            credits = self.principals.get(episode.tconst)
            if credits:
                yield credits

    def unique_principals(self, series_id: str) -> list[str]:
        """Names of everyone credited on the series' episodes, sorted, without repeats."""
        if series_id not in self.titles:
            return []
        return sorted(
            {
                principal.primary_name
                for credits in self._episode_credits(series_id)
                for principal in credits
            }
        )

    def most_common_genre(self) -> str:
        """Genre shared by the most series; ties go to the shorter, then earlier name.

        Returns "" when no series has a genre.
        """
        counts = Counter(genre for title in self.titles.values() for genre in title.genres)
        if not counts:
            return ""
        return min(counts, key=lambda genre: (-counts[genre], len(genre), genre))

    def principals_with_multiple_categories(self, series_id: str) -> list[str]:
        """Names, sorted, of people credited in more than one category on the series."""
        if series_id not in self.titles:
            return []
        categories: dict[str, set[str]] = defaultdict(set)
        names: dict[str, str] = {}
        for credits in self._episode_credits(series_id):
            for principal in credits:
                categories[principal.nconst].add(principal.category)
                names[principal.nconst] = principal.primary_name
        return sorted(names[person] for person, found in categories.items() if len(found) > 1)

    def principals_in_all_episodes(self, series_id: str) -> list[str]:
        """Names, sorted, of people credited on every episode of the series.

        Returns [] for an unknown series and raises KeyError for a known
        series that has no episodes.
        """
        if series_id not in self.titles:
            return []
        episodes = self.episodes.get(series_id)
        if not episodes:
            raise KeyError(f"series has no episodes: {series_id}")
        appearances: Counter[str] = Counter()
        names: dict[str, str] = {}
        for credits in self._episode_credits(series_id):
            for principal in credits:
                names[principal.nconst] = principal.primary_name
            appearances.update({principal.nconst for principal in credits})
        return sorted(
            names[person] for person, count in appearances.items() if count == len(episodes)
        )

    def principals_in_all_genres(self, genres: Iterable[str]) -> int:
        """Number of people credited on episodes of series of every one of ``genres``."""
        wanted = list(genres)
        found: dict[str, set[str]] = defaultdict(set)
        for title in self.titles.values():
            for genre in title.genres:
                if genre not in wanted or not self.episodes.get(title.tconst):
                    continue
                for credits in self._episode_credits(title.tconst):
                    for principal in credits:
                        found[principal.nconst].add(genre)
        return sum(1 for person_genres in found.values() if len(person_genres) == len(wanted))

    def principal_for_character(self, character: str) -> str:
        """Name of the person who played ``character`` in the most credits.

        Ties go to the alphabetically first name; "" when nobody played it.
        """
        counts: Counter[str] = Counter()
        names: dict[str, str] = {}
        for credits in self.principals.values():
            for principal in credits:
                played = sum(
                    1 for item in principal.characters if _character_name(item) == character
                )
                if played:
                    counts[principal.nconst] += played
                    names[principal.nconst] = principal.primary_name
        if not counts:
            return ""
        best = min(counts, key=lambda person: (-counts[person], names[person]))
        return names[best]


def load_database(
    basics_path: str | Path, episodes_path: str | Path, principals_path: str | Path
) -> SeriesDatabase:
    """Build a database from a basics, an episode and a principals file."""
    database = SeriesDatabase()
    for title in read_title_basics(basics_path):
        database.add_title(title)
    for episode in read_title_episodes(episodes_path):
        database.add_episode(episode)
    for principal in read_title_principals(principals_path):
        database.add_principal(principal)
    return database