"""Readers for the tab-separated title, episode and principal files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator

from .imdb_records import TitleBasics, TitleEpisode, TitlePrincipals

MISSING = "\\N"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _rows(path: str | Path, columns: int) -> Iterator[list[str]]:
    """Data rows of a file, header skipped, split into exactly ``columns`` fields.

    The last field keeps whatever follows the previous tab; absent fields are "".
    """
    with open(path, encoding="utf-8") as handle:
        next(handle, None)
        for line in handle:
            line = line.rstrip("\r\n")
            fields = line.split("\t", columns - 1)
            fields.extend([""] * (columns - len(fields)))
            yield fields


def _year_or_number(text: str) -> int:
    """Integer value of a field, with the missing marker read as 0."""
    return 0 if text == MISSING else int(text)


def _text(text: str) -> str:
    """Text of a field, with the missing marker read as ""."""
    return "" if text == MISSING else text


def _list_items(text: str) -> list[str]:
    """Comma-separated items; a trailing comma adds no empty item."""
    items = text.split(",")
    if items[-1] == "":
        items.pop()
    return items


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def _character(item: str) -> str:
    if item.startswith("["):
        item = item[1:]
    if item.endswith("]"):
        item = item[:-1]
    return item


def read_title_basics(path: str | Path) -> list[TitleBasics]:
    """Read the titles of a basics file.

    Missing years and runtimes become 0. Raises OSError if the file cannot
    be read and ValueError if a number is malformed.
    """
    return [
        TitleBasics(
            tconst=tconst,
            title_type=title_type,
            primary_title=primary,
            original_title=original,
            is_adult=adult == "1",
            start_year=_year_or_number(start),
            end_year=_year_or_number(end),
            runtime_minutes=_year_or_number(runtime),
            genres=_list_items(genres),
        )
        for tconst, title_type, primary, original, adult, start, end, runtime, genres
        in _rows(path, 9)
    ]


def read_title_episodes(path: str | Path) -> list[TitleEpisode]:
    """Read the episodes of an episode file.

    A season that is not a number makes both season and episode 0; an
    episode number that is not a number becomes 0.
    """
    episodes = []
    for tconst, parent, rest in _rows(path, 3):
        season_text, _, episode_text = rest.partition("\t")
        season = _leading_int(season_text)
        episode = _leading_int(episode_text) if season is not None else None
        episodes.append(
            TitleEpisode(
                tconst=tconst,
                parent_tconst=parent,
                season_number=season or 0,
                episode_number=episode or 0,
            )
        )
    return episodes


def read_title_principals(path: str | Path) -> list[TitlePrincipals]:
    """Read the credits of a principals file.

    Missing numbers become 0 and missing category or job become "".
    Characters are split on commas with surrounding brackets removed.
    """
    return [
        TitlePrincipals(
            tconst=tconst,
            ordering=_year_or_number(ordering),
            nconst=nconst,
            primary_name=name,
            birth_year=_year_or_number(birth),
            category=_text(category),
            job=_text(job),
            characters=[_character(item) for item in _list_items(characters)],
        )
        for tconst, ordering, nconst, name, birth, category, job, characters
        in _rows(path, 8)
    ]