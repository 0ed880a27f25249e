# seriestrack

A small library for keeping track of TV series and the people who watch them,
with a second part for answering questions over IMDb-style title data.
Everything is held in memory; it has no dependencies beyond the standard library.

## Installation

```
pip install seriestrack
pip install "seriestrack[test]"   # with the test dependencies
```

## Series and viewers

`seriestrack.models` holds the core records:

- `TVSeries` — title, seasons, episodes per season, genre, rating and whether
  it has finished. `total_episodes()` sums the episodes, `update_rating(users)`
  sets the rating to the average given by those users who watched it (raising
  `ValueError` for an empty list, returning 0 when none watched it), and
  `describe()` returns a text summary. Series compare with `<` by rating.
  Two series are the same only if they are the same object.
- `User` — a viewer with favourite genres, a `watched` mapping from series to
  progress (episodes watched and an integer rating) and a `wish_series` queue.
  Methods: `add_favorite_genre`, `add_watched_series`, `add_wish_series`,
  `add_episodes_watched`, `add_rating`, `rating_for`, `episodes_for`,
  `remove_watched_series`, `episodes_before` and `describe`. Asking about a
  series the user has not watched raises `SeriesNotWatchedError`.

`GENRES` lists the five genres the favourite-genre and statistics code knows:
Action, Comedy, Drama, Animation and Crime.

```python
from seriestrack.models import TVSeries, User

show = TVSeries("Dark", 3, [10, 8, 8], "Drama", 8.7, True)
viewer = User("ana", "Ana", "Portugal", ["Drama"])
viewer.add_watched_series(show)
viewer.add_episodes_watched(show, 12)
viewer.add_rating(show, 9)
print(show.update_rating([viewer]))   # 9.0
```

## Indexes

`seriestrack.index` provides:

- `UserTree` — a binary search tree of `UserNode`s keyed by username, with
  `add_user`, `remove`, `inorder`, `users_with_initial(letter)`,
  `users_not_fan()` (users with more than two unfinished series) and
  `category_statistics(genre, percent)`, which returns three counts for a genre.
- `HashTable` — an open-addressing table of `CountryStats` keyed by country,
  with quadratic probing (`hash_key`, `probe`), `insert`, `search`, `delete`
  (which leaves a deleted marker), `import_users(users)` to build per-country
  statistics from watch histories, and `show()` for a text dump of the slots.

## Follower graph

`seriestrack.graph.FollowGraph` records who follows whom. Besides `add_user`,
`position`, `add_follower` and `remove_follower`, it finds the users who follow
the most people (`most_following`), the series most watched by the people a
user follows (`following_most_watched_series`), and the number of follow steps
between two users (`shortest_path`, `None` when unreachable). `describe()`
lists each node with the users it follows.

## IMDb-style data

`seriestrack.imdb_records` defines `TitleBasics`, `TitleEpisode` and
`TitlePrincipals`; `seriestrack.imdb_io` reads them from tab-separated files
with a header line (`read_title_basics`, `read_title_episodes`,
`read_title_principals`). `seriestrack.imdb.SeriesDatabase` answers:

- `unique_principals(series_id)`
- `most_common_genre()`
- `principals_with_multiple_categories(series_id)`
- `principals_in_all_episodes(series_id)`
- `principals_in_all_genres(genres)`
- `principal_for_character(character)`

`load_database(basics_path, episodes_path, principals_path)` builds a database
from three such files.

```python
from seriestrack.imdb import load_database

db = load_database("basics.tsv", "episode.tsv", "principals.tsv")
print(db.most_common_genre())
print(db.principals_in_all_episodes("tt0000001"))
```

## What it does not do

- There are no collection classes for series catalogues or user registries:
  filtering series by genre, deleting a series from every user, suggesting
  series from one user to another, listing users who finished a series and
  building rating-ordered queues are not provided. Keep your own lists of
  `TVSeries` and `User` objects.
- Nothing reads or writes viewer data from files; only the IMDb-style
  tab-separated files can be read. Nothing is stored between runs.
- There is no command-line program; the package is used from Python code.

## Running the tests

```
pytest
```