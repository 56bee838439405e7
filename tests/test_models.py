import pytest
from tmdb_douban.models import DoubanSubject, MediaType, TMDBItem, normalize_to_douban
from tmdb_douban.models.douban import IMAGE_BASE_URL, PLACEHOLDER_IMAGE


def test_item_without_first_air_date_is_movie():
    """Items lacking a first air date are classified as movies."""
    item = TMDBItem.from_raw({"id": 1, "title": "Dune", "release_date": "2021-09-15"})
    assert item.media_kind == MediaType.MOVIE


def test_item_with_first_air_date_is_tv():
    item = TMDBItem.from_raw({"id": 2, "name": "Dark", "first_air_date": "2017-12-01"})
    assert item.media_kind == MediaType.TV


def test_normalize_movie():
    """Test a full movie result."""
    subject = normalize_to_douban({
        "id": 27205,
        "title": "盗梦空间",
        "original_title": "Inception",
        "release_date": "2010-07-15",
        "poster_path": "/inception.jpg",
        "vote_average": 8.4,
        "overview": "造梦师",
    })

    assert isinstance(subject, DoubanSubject)
    assert subject.id == "27205"
    assert subject.title == "盗梦空间"
    assert subject.original_title == "Inception"
    assert subject.year == "2010"
    assert subject.images.large == f"{IMAGE_BASE_URL}/inception.jpg"
    assert subject.images.medium == subject.images.large
    assert subject.images.small == subject.images.large
    assert subject.rating.average == 8.4
    assert subject.summary == "造梦师"
    assert subject.genres == []
    assert subject.casts == []
    assert subject.directors == []


def test_normalize_tv_uses_series_keys():
    """TV results carry name/original_name/first_air_date instead."""
    subject = normalize_to_douban({
        "id": 1399,
        "name": "权力的游戏",
        "original_name": "Game of Thrones",
        "first_air_date": "2011-04-17",
    })

    assert subject.title == "权力的游戏"
    assert subject.original_title == "Game of Thrones"
    assert subject.year == "2011"


def test_movie_keys_take_precedence():
    subject = normalize_to_douban({
        "id": 1,
        "title": "Movie Title",
        "name": "Series Name",
        "release_date": "1999-01-01",
        "first_air_date": "2005-01-01",
    })

    assert subject.title == "Movie Title"
    assert subject.year == "1999"


def test_normalize_id_only():
    """An item with only an id still yields a complete subject."""
    subject = normalize_to_douban({"id": 42})

    assert subject.id == "42"
    assert subject.title == ""
    assert subject.original_title == ""
    assert subject.year == ""
    assert subject.summary == ""
    assert subject.rating.average == 0
    assert subject.images.large == PLACEHOLDER_IMAGE
    assert subject.images.medium == PLACEHOLDER_IMAGE
    assert subject.images.small == PLACEHOLDER_IMAGE


@pytest.mark.parametrize("date,year", [
    ("2023-05-01", "2023"),
    ("", ""),
    ("2023", "2023"),
])
def test_year_extraction(date, year):
    assert normalize_to_douban({"id": 1, "release_date": date}).year == year


def test_normalize_drops_malformed_fields():
    """Fields of the wrong type fall back to defaults instead of failing."""
    subject = normalize_to_douban({
        "id": 7,
        "title": "Heat",
        "vote_average": "not a number",
        "poster_path": ["unexpected"],
    })

    assert subject.id == "7"
    assert subject.title == "Heat"
    assert subject.rating.average == 0
    assert subject.images.large == PLACEHOLDER_IMAGE


@pytest.mark.parametrize("raw_id,expected", [
    (27205, "27205"),
    ("tt0137523", "tt0137523"),
    (1.5, "1.5"),
])
def test_normalize_stringifies_id(raw_id, expected):
    assert normalize_to_douban({"id": raw_id}).id == expected


def test_normalize_non_mapping():
    subject = normalize_to_douban(None)
    assert subject.id == ""
    assert subject.images.large == PLACEHOLDER_IMAGE


def test_custom_image_base():
    subject = normalize_to_douban({"id": 1, "poster_path": "/p.jpg"}, "https://img.example/w185")
    assert subject.images.large == "https://img.example/w185/p.jpg"


def test_subject_serializes_to_douban_shape():
    data = normalize_to_douban({"id": 3, "title": "Up"}).model_dump()

    assert set(data) == {
        "id", "title", "original_title", "year", "images", "rating",
        "genres", "casts", "directors", "summary",
    }
    assert set(data["images"]) == {"large", "medium", "small"}
    assert data["rating"] == {"average": 0}
