"""Tests for catalog listings and duration formatting."""
import pytest
from songvault.services.catalog import CatalogQuery
from songvault.utils.formatting import format_duration


@pytest.mark.parametrize("seconds,expected", [
    (125.0, "02:05"),
    (59.9, "00:59"),
    (0, "00:00"),
    (None, "00:00"),
    (-3, "00:00"),
    (600, "10:00"),
    (3725, "02:05"),  # hour component dropped
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_songs_mode_orders_by_title(db, sample_catalog):
    songs = CatalogQuery(db).list_songs("songs")

    assert [s.title for s in songs] == ["Airbag", "Karma Police", "Roads"]


def test_default_mode_is_songs(db, sample_catalog):
    assert [s.title for s in CatalogQuery(db).list_songs()] == ["Airbag", "Karma Police", "Roads"]


def test_unknown_mode_falls_back_to_songs(db, sample_catalog):
    assert [s.title for s in CatalogQuery(db).list_songs("shuffle")] == ["Airbag", "Karma Police", "Roads"]


def test_discover_orders_newest_first(db, sample_catalog):
    songs = CatalogQuery(db).list_songs("discover")

    assert [s.title for s in songs] == ["Airbag", "Roads", "Karma Police"]
    dates = [s.date_added for s in songs]
    assert dates == sorted(dates, reverse=True)


def test_liked_returns_only_liked(db, sample_catalog):
    songs = CatalogQuery(db).list_songs("liked")

    assert {s.title for s in songs} == {"Karma Police", "Roads"}
    assert all(s.is_liked for s in songs)


def test_mode_is_case_insensitive(db, sample_catalog):
    assert len(CatalogQuery(db).list_songs("LIKED")) == 2


def test_view_is_flattened(db, sample_catalog):
    view = next(s for s in CatalogQuery(db).list_songs() if s.title == "Roads")

    assert view.artist == "Portishead"
    assert view.album == "Dummy"
    assert view.duration_formatted == "05:05"
    assert view.file_path == "/music/portishead/roads.flac"
    data = view.model_dump()
    assert isinstance(data["artist"], str)
    assert isinstance(data["album"], str)


def test_empty_catalog(db):
    assert CatalogQuery(db).list_songs("discover") == []
