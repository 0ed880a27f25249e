"""Records of the title, episode and principal tables of the series database."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TitleBasics:
    """A title: a TV series or any other kind of production."""

    tconst: str
    title_type: str = ""
    primary_title: str = ""
    original_title: str = ""
    is_adult: bool = False
    start_year: int = 0
    end_year: int = 0
    runtime_minutes: int = 0
    genres: list[str] = field(default_factory=list)


@dataclass
class TitlePrincipals:
    """A member of the cast or crew credited on one episode."""

    tconst: str
    ordering: int = 0
    nconst: str = ""
    primary_name: str = ""
    birth_year: int = 0
    category: str = ""
    job: str = ""
    characters: list[str] = field(default_factory=list)


@dataclass
class TitleEpisode:
    """An episode and the series it belongs to."""

    tconst: str
    parent_tconst: str = ""
    season_number: int = 0
    episode_number: int = 0