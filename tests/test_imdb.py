import pytest

from seriestrack.imdb import SeriesDatabase, load_database
from seriestrack.imdb_records import TitleBasics, TitleEpisode, TitlePrincipals


def credit(episode, person, name, category="self", characters=()):
    return TitlePrincipals(
        tconst=episode,
        nconst=person,
        primary_name=name,
        category=category,
        characters=list(characters),
    )


@pytest.fixture
def database():
    db = SeriesDatabase()
    db.add_title(TitleBasics("s1", "tvSeries", "Voetbal Inside", genres=["Sport", "Talk-Show"]))
    db.add_title(TitleBasics("s2", "tvSeries", "Wish ko lang", genres=["Drama", "Talk-Show"]))
    db.add_title(TitleBasics("s3", "tvSeries", "Empty", genres=["Comedy"]))
    for episode in ("e1", "e2", "e3"):
        db.add_episode(TitleEpisode(episode, "s1", 1, int(episode[1])))
    db.add_episode(TitleEpisode("f1", "s2", 1, 1))
    db.add_episode(TitleEpisode("f2", "s2", 1, 2))

    db.add_principal(credit("e1", "n1", "Wilfred Genee", characters=['"Self"']))
    db.add_principal(credit("e2", "n1", "Wilfred Genee", characters=['"Self"']))
    db.add_principal(credit("e3", "n1", "Wilfred Genee", characters=['"Self"']))
    db.add_principal(credit("e1", "n2", "Johan Derksen", characters=['"Self"']))
    db.add_principal(credit("e2", "n2", "Johan Derksen", "archive_footage"))
    db.add_principal(credit("e3", "n2", "Johan Derksen"))
    db.add_principal(credit("e1", "n3", "Danny Vera", characters=['"Raul"']))

    db.add_principal(credit("f1", "n4", "Jeffrey Hidalgo", "actor", ['"Raul"']))
    db.add_principal(credit("f2", "n4", "Jeffrey Hidalgo", "director"))
    db.add_principal(credit("f1", "n1", "Wilfred Genee"))
    return db


def test_unique_principals_sorted_without_repeats(database):
    assert database.unique_principals("s1") == ["Danny Vera", "Johan Derksen", "Wilfred Genee"]


def test_unique_principals_unknown_or_without_episodes(database):
    assert database.unique_principals("missing") == []
    assert database.unique_principals("s3") == []


def test_most_common_genre(database):
    assert database.most_common_genre() == "Talk-Show"


def test_most_common_genre_tie_prefers_shorter_name():
    db = SeriesDatabase()
    db.add_title(TitleBasics("a", genres=["Documentary", "Crime"]))
    db.add_title(TitleBasics("b", genres=["Documentary", "Crime"]))
    assert db.most_common_genre() == "Crime"


def test_most_common_genre_empty_database():
    assert SeriesDatabase().most_common_genre() == ""


def test_principals_with_multiple_categories(database):
    assert database.principals_with_multiple_categories("s2") == ["Jeffrey Hidalgo"]
    assert database.principals_with_multiple_categories("s1") == ["Johan Derksen"]
    assert database.principals_with_multiple_categories("missing") == []


def test_principals_in_all_episodes(database):
    assert database.principals_in_all_episodes("s1") == ["Johan Derksen", "Wilfred Genee"]
    assert database.principals_in_all_episodes("s2") == ["Jeffrey Hidalgo"]
    assert database.principals_in_all_episodes("missing") == []


def test_principals_in_all_episodes_counts_each_episode_once():
    db = SeriesDatabase()
    db.add_title(TitleBasics("s"))
    db.add_episode(TitleEpisode("e1", "s"))
    db.add_episode(TitleEpisode("e2", "s"))
    db.add_principal(credit("e1", "n1", "René van der Gijp", "self"))
    db.add_principal(credit("e1", "n1", "René van der Gijp", "writer"))
    assert db.principals_in_all_episodes("s") == []


def test_principals_in_all_episodes_series_without_episodes(database):
    with pytest.raises(KeyError):
        database.principals_in_all_episodes("s3")


def test_principals_in_all_genres(database):
    assert database.principals_in_all_genres(["Sport", "Talk-Show"]) == 3
    assert database.principals_in_all_genres(["Sport", "Drama"]) == 1
    assert database.principals_in_all_genres(["Comedy"]) == 0


def test_principals_in_all_genres_never_exceeds_credited_people(database):
    people = {p.nconst for credits in database.principals.values() for p in credits}
    assert database.principals_in_all_genres(["Talk-Show"]) <= len(people)


def test_principal_for_character(database):
    assert database.principal_for_character("Self") == "Wilfred Genee"
    assert database.principal_for_character("Raul") == "Danny Vera"
    assert database.principal_for_character("Nobody") == ""


def test_load_database(tmp_path):
    basics = tmp_path / "basics.tsv"
    basics.write_text(
        "tconst\ttitleType\tprimaryTitle\toriginalTitle\tisAdult\tstartYear\tendYear"
        "\truntimeMinutes\tgenres\n"
        "tt0383158\ttvSeries\tVoetbal Inside\tVoetbal Inside\t0\t2008\t\\N\t60\tSport,Talk-Show\n",
        encoding="utf-8",
    )
    episodes = tmp_path / "episodes.tsv"
    episodes.write_text(
        "tconst\tparentTconst\tseasonNumber\tepisodeNumber\n"
        "tt9000001\ttt0383158\t1\t1\n"
        "tt9000002\ttt0383158\t1\t2\n",
        encoding="utf-8",
    )
    principals = tmp_path / "principals.tsv"
    principals.write_text(
        "tconst\tordering\tnconst\tprimaryName\tbirthYear\tcategory\tjob\tcharacters\n"
        'tt9000001\t1\tnm0000001\tJohan Derksen\t1949\tself\t\\N\t["Self"]\n'
        'tt9000002\t1\tnm0000001\tJohan Derksen\t1949\tself\t\\N\t["Self"]\n'
        'tt9000002\t2\tnm0000002\tWim Kieft\t1962\tself\t\\N\t["Self"]\n',
        encoding="utf-8",
    )
    db = load_database(basics, episodes, principals)
    assert db.unique_principals("tt0383158") == ["Johan Derksen", "Wim Kieft"]
    assert db.principals_in_all_episodes("tt0383158") == ["Johan Derksen"]
    assert db.principal_for_character("Self") == "Johan Derksen"
    assert db.most_common_genre() == "Sport"


def test_load_database_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_database(tmp_path / "a.tsv", tmp_path / "b.tsv", tmp_path / "c.tsv")